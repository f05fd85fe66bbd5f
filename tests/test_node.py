"""Tests for B-tree nodes and the node arena"""
# pylint: skip-file

import unittest

from b_trees.factory import make_btree_classes
from b_trees.node import NodeArena


class TestNodeBase(unittest.TestCase):
    def setUp(self):
        self.t = 2
        _, self.NodeClass = make_btree_classes(self.t)
        self.node = self.NodeClass(0)


class TestNodeAccessors(TestNodeBase):
    def test_new_node_is_empty_leaf(self):
        self.assertTrue(self.node.leaf)
        self.assertEqual(self.node.key_count, 0)
        self.assertEqual(self.node.keys, [])
        self.assertEqual(self.node.children, [])
        self.assertFalse(self.node.is_full())

    def test_capacity_follows_min_degree(self):
        self.assertEqual(self.NodeClass.max_keys(), 3)
        self.assertEqual(self.NodeClass.max_children(), 4)
        _, node_class_5 = make_btree_classes(5)
        self.assertEqual(node_class_5.max_keys(), 9)

    def test_set_key_appends_then_overwrites(self):
        self.node.set_key(0, 10)
        self.node.set_key(1, 20)
        self.node.set_key(1, 15)
        self.assertEqual(self.node.keys, [10, 15])
        self.assertEqual(self.node.get_key(1), 15)
        self.assertEqual(self.node.key_count, 2)

    def test_set_key_out_of_bounds(self):
        with self.assertRaises(IndexError):
            self.node.set_key(1, 10)
        for i, key in enumerate([1, 2, 3]):
            self.node.set_key(i, key)
        self.assertTrue(self.node.is_full())
        with self.assertRaises(IndexError):
            self.node.set_key(3, 4)

    def test_get_key_past_live_count(self):
        self.node.set_key(0, 1)
        with self.assertRaises(IndexError):
            self.node.get_key(1)
        with self.assertRaises(IndexError):
            self.node.get_key(-1)

    def test_children(self):
        self.node.leaf = False
        self.node.set_child(0, 7)
        self.node.set_child(1, 8)
        self.node.set_child(0, 9)
        self.assertEqual(self.node.children, [9, 8])
        self.assertEqual(self.node.get_child(1), 8)
        with self.assertRaises(IndexError):
            self.node.get_child(2)
        with self.assertRaises(IndexError):
            self.node.set_child(3, 1)

    def test_child_capacity(self):
        for i in range(4):
            self.node.set_child(i, i)
        with self.assertRaises(IndexError):
            self.node.set_child(4, 4)

    def test_key_count_setter_truncates(self):
        self.node.keys.extend([1, 2, 3])
        self.node.key_count = 1
        self.assertEqual(self.node.keys, [1])
        with self.assertRaises(IndexError):
            self.node.key_count = 2

    def test_str_and_repr(self):
        self.node.keys.extend([4, 8])
        self.assertEqual(str(self.node), "[4 8]")
        self.assertEqual(repr(self.node), "BTreeNode_T2(handle=0, keys=[4, 8], leaf=True)")

    def test_equality_compares_keys(self):
        other = self.NodeClass(5)
        self.node.keys.extend([1, 2])
        other.keys.extend([1, 2])
        self.assertEqual(self.node, other)
        other.keys.append(3)
        self.assertNotEqual(self.node, other)
        self.assertNotEqual(self.node, [1, 2])


class TestNodeArena(unittest.TestCase):
    def setUp(self):
        _, node_class = make_btree_classes(3)
        self.arena = NodeArena(node_class)

    def test_handles_follow_allocation_order(self):
        nodes = [self.arena.allocate() for _ in range(4)]
        self.assertEqual([n.handle for n in nodes], [0, 1, 2, 3])
        self.assertEqual(len(self.arena), 4)
        self.assertEqual(list(self.arena), nodes)

    def test_allocate_internal(self):
        node = self.arena.allocate(leaf=False)
        self.assertFalse(node.leaf)
        self.assertEqual(type(node).__name__, "BTreeNode_T3")

    def test_get_and_contains(self):
        node = self.arena.allocate()
        self.assertIs(self.arena.get(0), node)
        self.assertIn(0, self.arena)
        self.assertNotIn(1, self.arena)
        self.assertNotIn("0", self.arena)

    def test_unknown_handle(self):
        with self.assertRaises(IndexError):
            self.arena.get(0)
        self.arena.allocate()
        with self.assertRaises(IndexError):
            self.arena.get(-1)


if __name__ == "__main__":
    unittest.main()
