# bench.py
# Put/Get timings for FuzzyTrie over random string keys (one segment per
# character) and random path keys (/part/part/part).

import argparse
import random
import string
import time

from colorama import Fore

import utils
from utils import log_with_time, vlog, format_rate
from fuzzy_trie import FuzzyTrie
from segmenter import path_segmenter, rune_segmenter

NUM_KEYS = 1000        # random keys per key set
BYTES_PER_KEY = 30     # length of each string key
PARTS_PER_KEY = 3      # e.g. /a/b/c has parts /a, /b, /c
BYTES_PER_PART = 10
ITERATIONS = 10_000    # operations per benchmark

# No '/' or '*' so a random key never splits oddly or gets rejected
KEY_ALPHABET = string.ascii_letters + string.digits


def random_string_keys(rng, count=NUM_KEYS, length=BYTES_PER_KEY):
    return ["".join(rng.choices(KEY_ALPHABET, k=length)) for _ in range(count)]


def random_path_keys(rng, count=NUM_KEYS, parts=PARTS_PER_KEY, part_len=BYTES_PER_PART):
    keys = []
    for _ in range(count):
        key = ""
        for _ in range(parts):
            key += "/" + "".join(rng.choices(KEY_ALPHABET, k=part_len))
        keys.append(key)
    return keys


def bench_put(keys, segmenter, iterations):
    trie = FuzzyTrie(segmenter)
    n = len(keys)
    t0 = time.perf_counter()
    for i in range(iterations):
        trie.put(keys[i % n], i)
    return time.perf_counter() - t0


def bench_get(keys, segmenter, iterations):
    trie = FuzzyTrie(segmenter)
    n = len(keys)
    for i in range(iterations):
        trie.put(keys[i % n], i)
    t0 = time.perf_counter()
    for i in range(iterations):
        trie.get(keys[i % n])
    return time.perf_counter() - t0


def run_suite(label, keys, segmenter, iterations):
    """Run the Put and Get benchmarks for one key set."""
    results = []
    for op, fn in (("Put", bench_put), ("Get", bench_get)):
        name = f"FuzzyTrie{op}{label}"
        t0 = time.time()
        elapsed = fn(keys, segmenter, iterations)
        vlog(f"{name} finished", t0)
        results.append((name, elapsed, iterations))
    return results


def run_bench(argv=None):
    parser = argparse.ArgumentParser(description="FuzzyTrie benchmarks")
    parser.add_argument("--keys", type=int, default=NUM_KEYS, help=f"Random keys per key set (default: {NUM_KEYS})")
    parser.add_argument("--iterations", type=int, default=ITERATIONS, help=f"Operations per benchmark (default: {ITERATIONS})")
    parser.add_argument("--bytes-per-key", type=int, default=BYTES_PER_KEY, help=f"Length of string keys (default: {BYTES_PER_KEY})")
    parser.add_argument("--parts", type=int, default=PARTS_PER_KEY, help=f"Segments per path key (default: {PARTS_PER_KEY})")
    parser.add_argument("--bytes-per-part", type=int, default=BYTES_PER_PART, help=f"Length of each path segment (default: {BYTES_PER_PART})")
    parser.add_argument("--mode", choices=["path", "string", "all"], default="all", help="Which key sets to benchmark (default: all)")
    parser.add_argument("--seed", type=int, default=None, help="Seed for key generation")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    args = parser.parse_args(argv)

    if args.keys < 1:
        parser.error("--keys must be at least 1")

    utils.start_time = time.time()
    utils.VERBOSE = args.verbose
    rng = random.Random(args.seed)

    results = []
    if args.mode in ("string", "all"):
        keys = random_string_keys(rng, args.keys, args.bytes_per_key)
        vlog(f"Generated {len(keys)} string keys")
        results += run_suite("StringKey", keys, rune_segmenter, args.iterations)
    if args.mode in ("path", "all"):
        keys = random_path_keys(rng, args.keys, args.parts, args.bytes_per_part)
        vlog(f"Generated {len(keys)} path keys")
        results += run_suite("PathKey", keys, path_segmenter, args.iterations)

    log_with_time("=== BENCHMARK REPORT ===", color=Fore.GREEN)
    for name, elapsed, ops in results:
        log_with_time(f"{name:<28} {ops:>8} ops  {elapsed:.3f}s  {format_rate(elapsed, ops)}")
    return results
