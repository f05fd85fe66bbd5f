"""Tests for the node read/write hooks"""
# pylint: skip-file

import unittest

from b_trees.factory import create_btree
from b_trees.storage import NodeStorage, NullNodeStorage, CountingNodeStorage


class RecordingStorage(NodeStorage):
    def __init__(self):
        self.events = []

    def read_node(self, node):
        self.events.append(("read", node.handle))

    def write_node(self, node):
        self.events.append(("write", node.handle, list(node.keys)))


class TestNodeStorageHooks(unittest.TestCase):
    def setUp(self):
        self.storage = CountingNodeStorage()
        self.tree = create_btree(2, self.storage)

    def test_root_written_at_construction(self):
        self.assertEqual(dict(self.storage.writes), {0: 1})
        self.assertEqual(self.storage.total_reads, 0)

    def test_insert_into_leaf_root(self):
        self.tree.insert(10)
        self.assertEqual(dict(self.storage.reads), {0: 1})
        self.assertEqual(dict(self.storage.writes), {0: 2})

    def test_root_split_writes_all_three_nodes(self):
        for key in [1, 2, 3]:
            self.tree.insert(key)
        self.storage.reset()

        self.tree.insert(4)

        # old root 0, new root 1, sibling 2
        self.assertEqual(dict(self.storage.reads), {0: 2})
        self.assertEqual(dict(self.storage.writes), {2: 1, 0: 2, 1: 1})

    def test_search_reads_path_only(self):
        for key in [1, 2, 3, 4]:
            self.tree.insert(key)
        self.storage.reset()

        self.assertIsNotNone(self.tree.search(1))
        self.assertEqual(dict(self.storage.reads), {1: 1, 2: 1})
        self.assertEqual(self.storage.total_writes, 0)

    def test_failed_search_reads_to_leaf(self):
        for key in [1, 2, 3, 4]:
            self.tree.insert(key)
        self.storage.reset()

        self.assertIsNone(self.tree.search(5))
        self.assertEqual(dict(self.storage.reads), {1: 1, 0: 1})

    def test_reads_bounded_by_height(self):
        for key in range(500):
            self.tree.insert(key)
        self.storage.reset()
        self.tree.search(250)
        self.assertLessEqual(self.storage.total_reads, self.tree.height() + 1)


class TestWriteOrder(unittest.TestCase):
    def test_split_writes_sibling_child_then_parent(self):
        storage = RecordingStorage()
        tree = create_btree(2, storage)
        for key in [1, 2, 3]:
            tree.insert(key)
        storage.events.clear()

        tree.insert(4)

        writes = [e for e in storage.events if e[0] == "write"]
        self.assertEqual(writes, [
            ("write", 2, [1]),
            ("write", 0, [3]),
            ("write", 1, [2]),
            ("write", 0, [3, 4]),
        ])


class TestNullStorage(unittest.TestCase):
    def test_default_hooks_do_nothing(self):
        storage = NullNodeStorage()
        tree = create_btree(3, storage)
        for key in range(20):
            tree.insert(key)
        self.assertEqual(len(tree), 20)

    def test_storage_is_abstract(self):
        with self.assertRaises(TypeError):
            NodeStorage()


if __name__ == "__main__":
    unittest.main()
