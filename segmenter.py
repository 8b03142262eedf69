# segmenter.py
# Key segmenters for FuzzyTrie. A segmenter takes (key, start) and returns
# (segment, next_start); next_start is -1 once the returned segment is the last.
# An empty segment means there is nothing left to read.

from typing import Callable, Tuple

from utils import SEPARATOR

Segmenter = Callable[[str, int], Tuple[str, int]]


def path_segmenter(path: str, start: int) -> Tuple[str, int]:
    """
    Split on '/': "/a/b/c" yields "/a", "/b", "/c".
    The segment starting at ``start`` runs up to (not including) the next '/'.
    """
    if not path or start < 0 or start > len(path) - 1:
        return "", -1
    end = path.find(SEPARATOR, start + 1)  # next '/' after the first char
    if end == -1:
        return path[start:], -1
    return path[start:end], end


def rune_segmenter(key: str, start: int) -> Tuple[str, int]:
    """One character per segment."""
    if not key or start < 0 or start > len(key) - 1:
        return "", -1
    if start == len(key) - 1:
        return key[start], -1
    return key[start], start + 1
