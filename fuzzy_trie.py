# fuzzy_trie.py
# Segment-keyed trie: exact get/put, plus trailing-'*' patterns for bulk
# delete and for walking one path with a fan-out at its last segment.

import time
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from segmenter import Segmenter, path_segmenter
from utils import SEPARATOR, WILDCARD, vlog

# visitor(path, value) -> None to keep going, anything else stops the walk
WalkFunc = Callable[[str, Any], Any]

# "/*" selects every child regardless of its segment text
WHOLE_CHILDREN = SEPARATOR + WILDCARD

_EMPTY = object()  # marks a node that stores no value


class FuzzyTrieConfig:
    """Construction options for FuzzyTrie.with_config()."""

    __slots__ = ("segmenter",)

    def __init__(self, segmenter: Optional[Segmenter] = None):
        self.segmenter = segmenter


class _Node:
    __slots__ = ("value", "children")

    def __init__(self):
        self.value: Any = _EMPTY
        # segment -> child; allocated on first insert, dropped when emptied
        self.children: Optional[Dict[str, "_Node"]] = None

    def has_value(self) -> bool:
        return self.value is not _EMPTY

    def is_leaf(self) -> bool:
        return not self.children

    def child(self, part: str) -> Optional["_Node"]:
        if not self.children:
            return None
        return self.children.get(part)


class FuzzyTrie:
    """
    Trie keyed by the segments a segmenter cuts out of each key.
      - get(key)              exact match, no wildcard handling
      - put(key, value)       False if any segment ends in '*'
      - delete(pattern)       exact delete, or bulk delete with '/*' / 'prefix*'
      - walk(visitor)         every stored value, pre-order, unordered siblings
      - walk_path(pattern, visitor)
                              values along one path, fanning out over the
                              matching children when the path ends in '*'
    A visitor returning anything other than None stops the traversal and that
    object is handed back to the caller.
    """

    __slots__ = ("_segmenter", "_root")

    def __init__(self, segmenter: Optional[Segmenter] = None):
        self._segmenter: Segmenter = segmenter or path_segmenter
        self._root = _Node()

    # ---------- Construction ----------
    @classmethod
    def with_config(cls, config: Optional[FuzzyTrieConfig]) -> "FuzzyTrie":
        segmenter = path_segmenter
        if config is not None and config.segmenter is not None:
            segmenter = config.segmenter
        return cls(segmenter)

    @classmethod
    def build(
        cls,
        items: Union[Mapping[str, Any], Iterable[Tuple[str, Any]]],
        segmenter: Optional[Segmenter] = None,
    ) -> "FuzzyTrie":
        """
        Build a trie from a mapping or from (key, value) pairs.
        Keys with a '*'-suffixed segment are skipped.
        """
        t0 = time.time()
        trie = cls(segmenter)
        pairs = items.items() if isinstance(items, Mapping) else items
        stored = skipped = 0
        for key, value in pairs:
            if trie.put(key, value):
                stored += 1
            else:
                skipped += 1
        vlog(f"Built trie ({stored} stored, {skipped} rejected)", t0)
        return trie

    @property
    def segmenter(self) -> Segmenter:
        return self._segmenter

    # ---------- Public API ----------
    def get(self, key: str, default: Any = None) -> Any:
        """Value stored at exactly ``key``, or ``default``."""
        node = self._root
        for part, _ in self._segments(key):
            node = node.child(part)
            if node is None:
                return default
        return node.value if node.has_value() else default

    def put(self, key: str, value: Any) -> bool:
        """
        Store ``value`` at ``key``, overwriting any previous value.
        A '*'-suffixed segment aborts the insert and returns False; nodes
        created for the segments before it are left in place.
        """
        node = self._root
        for part, _ in self._segments(key):
            if part.endswith(WILDCARD):
                vlog(f"put {key!r} rejected: wildcard segment {part!r}")
                return False
            child = node.child(part)
            if child is None:
                if node.children is None:
                    node.children = {}
                child = _Node()
                node.children[part] = child
            node = child
        node.value = value
        return True

    def delete(self, pattern: str) -> bool:
        """
        Remove the value at ``pattern``; True if the path exists.

        If a segment has no literal match and ends in '*', it is applied to
        the children of the node reached so far instead: '/*' drops all of
        them, 'prefix*' drops those whose segment starts with 'prefix'. That
        always counts as found and ends the walk.
        """
        path: List[Tuple[_Node, str]] = []
        node = self._root
        for part, _ in self._segments(pattern):
            path.append((node, part))
            child = node.child(part)
            if child is None:
                if not part.endswith(WILDCARD):
                    return False
                doomed = _wildcard_matches(node, part)
                for seg in doomed:
                    del node.children[seg]
                vlog(f"delete {pattern!r}: removed {len(doomed)} children")
                if node.is_leaf():
                    node.children = None
                    if not node.has_value():
                        self._prune(path[:-1])
                return True
            node = child

        node.value = _EMPTY
        if node.is_leaf():
            self._prune(path)
        return True

    def walk(self, walker: WalkFunc) -> Any:
        """
        Visit every stored value; returns the first failure, else None.
        Any non-None return from ``walker`` is a failure, falsy values such
        as False or 0 included, so a visitor that should keep going must
        return None.
        """
        return self._walk(self._root, "", walker)

    def walk_path(self, pattern: str, walker: WalkFunc) -> Any:
        """
        Visit the values on the path spelled by ``pattern``, root first.

        /usr/local/bin and /usr/local/env are both reached from /usr/local.
        /usr/local/bin and /usr/local/bit are reached from /usr/local/b*, while
        /usr/local/env is not. A wildcard only looks one level down: each
        matching child is visited once (with None if it holds no value).
        A segment that matches nothing ends the walk quietly.

        As with walk(), any non-None return from ``walker`` (False and 0
        too) stops the walk and is returned.
        """
        root = self._root
        if root.has_value():
            err = walker("", root.value)
            if err is not None:
                return err

        node = root
        for part, i in self._segments(pattern):
            k = pattern if i == -1 else pattern[:i]
            child = node.child(part)
            if child is None:
                if not part.endswith(WILDCARD):
                    return None
                base = k[:-len(part)] if k.endswith(part) else k
                for seg in _wildcard_matches(node, part, exact=True):
                    target = node.children[seg]
                    value = target.value if target.has_value() else None
                    err = walker(base + seg, value)
                    if err is not None:
                        return err
                return None
            if child.has_value():
                err = walker(k, child.value)
                if err is not None:
                    return err
            node = child
        return None

    def is_leaf(self) -> bool:
        """True if nothing hangs below the root."""
        return self._root.is_leaf()

    def __contains__(self, key: str) -> bool:
        return self.get(key, _EMPTY) is not _EMPTY

    def __len__(self) -> int:
        count = 0

        def counter(_path, _value):
            nonlocal count
            count += 1

        self.walk(counter)
        return count

    # ---------- Helpers ----------
    def _segments(self, key: str) -> Iterable[Tuple[str, int]]:
        """Yield (segment, next_start) until the segmenter returns ''."""
        segment = self._segmenter
        part, i = segment(key, 0)
        while part:
            yield part, i
            if i == -1:
                return
            part, i = segment(key, i)

    def _walk(self, node: _Node, key: str, walker: WalkFunc) -> Any:
        """Pre-order over an explicit (node, path) stack."""
        stack: List[Tuple[_Node, str]] = [(node, key)]
        while stack:
            node, key = stack.pop()
            if node.has_value():
                err = walker(key, node.value)
                if err is not None:
                    return err
            if node.children:
                items = reversed(list(node.children.items()))
                stack.extend((child, key + part) for part, child in items)
        return None

    @staticmethod
    def _prune(path: List[Tuple[_Node, str]]) -> None:
        """
        Unlink an emptied node, climbing while each parent is left with no
        children and no value. ``path[-1]`` names the emptied node.
        """
        for parent, part in reversed(path):
            del parent.children[part]
            if not parent.is_leaf():
                break
            parent.children = None
            if parent.has_value():
                break


def _wildcard_matches(node: _Node, part: str, exact: bool = False) -> List[str]:
    """
    Child segments of ``node`` selected by a '*'-suffixed ``part``.
    Delete accepts '/*' with surrounding whitespace; walk_path passes
    ``exact=True`` and takes only a bare '/*' as the whole-children form.
    """
    if not node.children:
        return []
    whole = part if exact else part.strip()
    if whole == WHOLE_CHILDREN:
        return list(node.children)
    prefix = part[:-len(WILDCARD)]
    return [seg for seg in node.children if seg.startswith(prefix)]
