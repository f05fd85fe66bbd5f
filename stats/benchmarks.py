#!/usr/bin/env python3
"""
Benchmarks for the B-tree.

This script measures:
 1. Full tree build times for several sizes
 2. Shape statistics of one large tree
 3. Per-insert and per-search cost into trees of various sizes
 4. Node reads/writes per operation through the storage hooks

Usage:
    python -m stats.benchmarks [--degree T] [--sizes 100 1000 10000] [--trials N]
"""
import argparse
import random
import time
import gc
from pprint import pprint
from dataclasses import asdict
from statistics import mean, variance

from b_trees.btree_base import btree_stats_
from b_trees.factory import create_btree
from b_trees.profiling import PerformanceTracker
from b_trees.storage import CountingNodeStorage
from stats.stats_btree import random_keys, random_btree_of_size, create_btree_from_keys


def bench_build(sizes: list[int], t: int) -> None:
    """Measure random_btree_of_size for various sizes."""
    for n in sizes:
        t0 = time.perf_counter()
        _ = random_btree_of_size(n, t)
        elapsed = time.perf_counter() - t0
        print(f"[bench] random_btree_of_size({n}, t={t}): {elapsed:.4f}s")


def bench_stats(n: int, t: int) -> None:
    """Build a single random tree and print its stats."""
    tree = random_btree_of_size(n, t)
    stats = btree_stats_(tree)
    print(f"[bench] random_btree_of_size({n}, t={t}) stats:")
    pprint(asdict(stats))


def measure_single_ops(n: int, t: int, trials: int = 200) -> tuple[float, float, float, float]:
    """
    Measure per-insert and per-search cost into a tree of exactly `n` keys.
    Returns (insert_avg, insert_var, search_avg, search_var) in seconds.
    """
    keys = random_keys(n + trials)
    tree = create_btree_from_keys(keys[:n], t)
    probes = [int(k) for k in keys[n:]]
    present = [int(k) for k in random.sample(list(keys[:n]), k=min(trials, n))] if n else []

    gc.collect()
    gc.disable()
    try:
        search_times = []
        for key in present:
            t0 = time.perf_counter()
            tree.search(key)
            search_times.append(time.perf_counter() - t0)

        insert_times = []
        for key in probes:
            t0 = time.perf_counter()
            tree.insert(key)
            insert_times.append(time.perf_counter() - t0)
    finally:
        gc.enable()

    insert_avg = mean(insert_times) if insert_times else 0.0
    insert_var = variance(insert_times) if len(insert_times) > 1 else 0.0
    search_avg = mean(search_times) if search_times else 0.0
    search_var = variance(search_times) if len(search_times) > 1 else 0.0
    return insert_avg, insert_var, search_avg, search_var


def bench_single_ops(sizes: list[int], t: int, trials: int) -> None:
    for n in sizes:
        avg, var, s_avg, s_var = measure_single_ops(n, t, trials)
        print(f"[bench] Insert into size {n:<7} → avg {avg*1e6:8.2f} µs   σ²={var*1e12:8.2f} µs²")
        print(f"[bench] Search in size {n:<9} → avg {s_avg*1e6:8.2f} µs   σ²={s_var*1e12:8.2f} µs²")


def bench_node_io(n: int, t: int) -> None:
    """Average node reads/writes per insert when building a tree of n keys."""
    storage = CountingNodeStorage()
    tree = create_btree(t, storage)
    storage.reset()
    for key in random_keys(n):
        tree.insert(int(key))
    print(f"[bench] {n} inserts, t={t}: "
          f"{storage.total_reads / n:.2f} reads/insert, "
          f"{storage.total_writes / n:.2f} writes/insert, height {tree.height()}")


def main():
    parser = argparse.ArgumentParser(description="B-tree benchmarks")
    parser.add_argument("--degree", type=int, default=16,
                        help="Minimum degree t of the benchmarked trees")
    parser.add_argument("--sizes", nargs='+', type=int, default=[100, 1000, 10_000],
                        help="Tree sizes for single-operation benchmarks")
    parser.add_argument("--trials", type=int, default=100,
                        help="Number of inserts/searches per size")
    args = parser.parse_args()

    tracker = PerformanceTracker.get_instance()
    tracker.enable()

    print("\n=== Full Tree Build ===")
    bench_build([10, 100, 1000, 10_000, 100_000], args.degree)

    print("\n=== Tree Stats ===")
    bench_stats(100_000, args.degree)

    print("\n=== Single-Operation Benchmarks ===")
    bench_single_ops(args.sizes, args.degree, args.trials)

    print("\n=== Node I/O ===")
    bench_node_io(10_000, args.degree)

    print("\n=== Method-Level Performance Breakdown ===")
    print(tracker.report())
    tracker.reset()

if __name__ == "__main__":
    main()
