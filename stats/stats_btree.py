"""Statistics for B-trees."""
# pylint: skip-file

import os
import logging
import math
import time
from statistics import mean
from typing import Any, List, Optional, Tuple
from datetime import datetime
import numpy as np

from b_trees.btree_base import (
    BTreeBase,
    Stats,
    btree_stats_,
    collect_keys,
)
from b_trees.factory import create_btree
from b_trees.profiling import PerformanceTracker

TREE_FLAGS = (
    "is_search_tree",
    "keys_ascending",
    "key_counts_in_bounds",
    "leaves_same_depth",
    "child_counts_match",
    "leaf_flags_consistent",
)


def assert_invariants(t: BTreeBase, stats: Stats) -> None:
    """Check all invariants, but only log ERROR messages on failures."""
    for flag in TREE_FLAGS:
        if not getattr(stats, flag):
            logging.error("Invariant failed: %s is False", flag)

    if stats.key_count != len(t):
        logging.error(
            "Invariant failed: key_count=%d != len(tree)=%d",
            stats.key_count, len(t)
        )
    if not t.is_empty() and stats.height != t.height():
        logging.error(
            "Invariant failed: stats height=%d != tree height=%d",
            stats.height, t.height()
        )


def random_keys(n: int, space: int = 1 << 24, seed: Optional[int] = None) -> np.ndarray:
    """Draw n distinct keys from [0, space) in random order."""
    if space <= n:
        raise ValueError(f"Key-space too small! Required: {n + 1}, Available: {space}")
    rng = np.random.default_rng(seed)
    return rng.choice(space, size=n, replace=False)


def create_btree_from_keys(keys, t: int) -> BTreeBase:
    """Build a tree of minimum degree t by inserting keys in the given order."""
    tree = create_btree(t)
    tree_insert = tree.insert
    for key in keys:
        tree_insert(int(key))
    return tree


def random_btree_of_size(n: int, t: int, seed: Optional[int] = None) -> BTreeBase:
    """Create a tree of minimum degree t holding n distinct random keys."""
    return create_btree_from_keys(random_keys(n, seed=seed), t)


def check_keys_in_order(
    tree: BTreeBase,
    expected_keys: Optional[List[Any]] = None
) -> Tuple[List[Any], bool, bool]:
    """
    Collect the keys of the tree in in-order sequence and compute:
      1. presence_ok: if `expected_keys` is provided, is the tree's key multiset
                      exactly that of expected_keys? otherwise always True.
      2. order_ok: is the sequence non-decreasing?

    Returns:
        (keys, presence_ok, order_ok)
    """
    keys = collect_keys(tree)
    order_ok = all(not b < a for a, b in zip(keys, keys[1:]))

    presence_ok = True
    if expected_keys is not None:
        presence_ok = keys == sorted(expected_keys)

    return keys, presence_ok, order_ok


def repeated_experiment(
        size: int,
        repetitions: int,
        t: int,
    ) -> None:
    """
    Repeatedly builds random B-trees of `size` keys with minimum degree t and
    logs averaged shape statistics and timings.
    """
    t_all_0 = time.perf_counter()

    results = []
    times_build = []
    times_stats = []

    for _ in range(repetitions):
        t0 = time.perf_counter()
        tree = random_btree_of_size(size, t)
        times_build.append(time.perf_counter() - t0)

        t0 = time.perf_counter()
        stats = btree_stats_(tree)
        times_stats.append(time.perf_counter() - t0)

        assert_invariants(tree, stats)
        results.append(stats)

    # Height bounds for n keys: log_{2t}(n+1) - 1 <= h <= log_t((n+1)/2)
    min_height = max(0, math.ceil(math.log(size + 1, 2 * t) - 1)) if size > 0 else 0
    max_height = math.floor(math.log((size + 1) / 2, t)) if size > 0 else 0

    avg_height     = mean(s.height for s in results)
    avg_node_count = mean(s.node_count for s in results)
    avg_leaf_count = mean(s.leaf_count for s in results)
    avg_fill       = mean(s.key_count / (s.node_count * (2 * t - 1)) for s in results)
    avg_build_time = mean(times_build)
    avg_stats_time = mean(times_stats)

    var_height     = mean((s.height - avg_height)**2 for s in results)
    var_node_count = mean((s.node_count - avg_node_count)**2 for s in results)
    var_fill       = mean(((s.key_count / (s.node_count * (2 * t - 1))) - avg_fill)**2 for s in results)

    rows = [
        ("Node count",      avg_node_count, var_node_count),
        ("Leaf count",      avg_leaf_count, None),
        ("Fill factor",     avg_fill,       var_fill),
        ("Height",          avg_height,     var_height),
        ("Min height",      min_height,     None),
        ("Max height",      max_height,     None),
    ]

    header = f"{'Metric':<20} {'Avg':>15} {'(Var)':>15}"
    sep_line = "-" * len(header)
    logging.info(header)
    logging.info(sep_line)
    for name, avg, var in rows:
        if var is None:
            logging.info(f"{name:<20} {avg:>15}")
        else:
            logging.info(f"{name:<20} {avg:15.2f} {f'({var:.2f})':>15}")

    logging.info("")
    logging.info("Performance summary:")
    logging.info(f"{'Build time (s)':<20}{avg_build_time:13.6f}{sum(times_build):13.6f}")
    logging.info(f"{'Stats time (s)':<20}{avg_stats_time:13.6f}{sum(times_stats):13.6f}")
    logging.info(sep_line)
    logging.info("Execution time: %.3f seconds", time.perf_counter() - t_all_0)


if __name__ == "__main__":
    log_dir = os.path.join(os.getcwd(), "stats/logs")
    os.makedirs(log_dir, exist_ok=True)

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_path = os.path.join(log_dir, f"run_{ts}.log")

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[
            logging.FileHandler(log_path, mode="w"),
            logging.StreamHandler()
        ]
    )

    tracker = PerformanceTracker.get_instance()
    tracker.enable()

    sizes = [1000, 10_000]
    degrees = [2, 4, 16]
    repetitions = 3

    for n in sizes:
        for t in degrees:
            logging.info("")
            logging.info(f"---------------- NOW RUNNING EXPERIMENT: n = {n}, t = {t}, repetitions = {repetitions} ----------------")
            t0 = time.perf_counter()
            repeated_experiment(size=n, repetitions=repetitions, t=t)
            logging.info(f"Total experiment time: {time.perf_counter() - t0:.3f} seconds")
            for line in tracker.report().split('\n'):
                logging.info(line)
            tracker.reset()
