"""Utility functions for testing B-tree invariants."""

from b_trees.btree_base import (
    BTreeBase,
    Stats
)

TREE_FLAGS = (
    "is_search_tree",
    "key_counts_in_bounds",
    "leaves_same_depth",
    "child_counts_match",
    "leaf_flags_consistent",
)

def assert_tree_invariants_tc(tc, t: BTreeBase, stats: Stats, distinct: bool = True) -> None:
    """TestCase version: use inside unittest.TestCase methods."""
    for flag in TREE_FLAGS:
        tc.assertTrue(
            getattr(stats, flag),
            f"Invariant failed: {flag} is False\n{t.print_structure()}"
        )
    if distinct:
        tc.assertTrue(
            stats.keys_ascending,
            f"Invariant failed: keys_ascending is False\n{t.print_structure()}"
        )

    tc.assertEqual(
        stats.key_count, len(t),
        f"Invariant failed: key_count={stats.key_count} ≠ len(tree)={len(t)}"
    )
    tc.assertEqual(
        stats.height, t.height(),
        f"Invariant failed: stats height={stats.height} ≠ tree height={t.height()}"
    )
    tc.assertEqual(
        stats.node_count, len(t.arena),
        f"Invariant failed: node_count={stats.node_count} ≠ allocated nodes={len(t.arena)}"
    )

    if not t.is_empty():
        tc.assertIsNotNone(
            stats.least_key,
            "Invariant failed: least_key is None for non-empty tree"
        )
        tc.assertIsNotNone(
            stats.greatest_key,
            "Invariant failed: greatest_key is None for non-empty tree"
        )
