"""Tests for the B-Tree, binary heap, red-black tree, stack, queue and trie."""

import random

import pytest

from engine import NoticeKind
from config import Limits
from trees import BinaryHeap, BTree, Color, HeapKind, Queue, RedBlackTree, Stack, Trie


class TestBTreeInsert:
    def test_first_key_becomes_root(self):
        tree = BTree()
        result = tree.insert(10)
        assert result.ok
        assert result.notice.text == "Inserted 10 as root"
        assert tree.root.keys == [10]

    @pytest.mark.parametrize("t", [2, 3, 4])
    def test_invariants_after_random_inserts(self, t):
        tree = BTree(min_degree=t)
        rng = random.Random(t)
        keys = rng.sample(range(1, 500), 120)
        for k in keys:
            assert tree.insert(k).ok
            assert tree.violations() == []
        assert tree.keys() == sorted(keys)
        assert tree.stats().key_count == len(keys)

    def test_root_split_grows_height(self):
        tree = BTree(min_degree=2)
        for k in (1, 2, 3):
            tree.insert(k)
        assert tree.stats().height == 1
        tree.insert(4)
        assert tree.stats().height == 2
        assert tree.root.keys == [2]

    def test_split_is_animated(self):
        tree = BTree(min_degree=2)
        for k in (1, 2, 3):
            tree.insert(k)
        frames = tree.insert(4).frames
        assert any("split" in f.highlights for f in frames)
        assert frames[-1].highlights == {}
        assert frames[-1].snapshot == tree.to_dict()

    def test_duplicate_rejected_and_tree_unchanged(self):
        tree = BTree()
        for k in (5, 1, 9):
            tree.insert(k)
        before = tree.to_dict()
        result = tree.insert(9)
        assert result.notice.kind == NoticeKind.ERROR
        assert result.notice.text == "Key 9 already exists in the tree"
        assert result.frames == []
        assert tree.to_dict() == before

    def test_min_degree_below_two(self):
        with pytest.raises(ValueError):
            BTree(min_degree=1)

    def test_insert_random_is_unique(self):
        tree = BTree()
        rng = random.Random(0)
        for _ in range(30):
            assert tree.insert_random(rng, low=1, high=40).ok
        assert len(set(tree.keys())) == 30


class TestBTreeDelete:
    @pytest.mark.parametrize("t", [2, 3])
    def test_invariants_after_random_deletes(self, t):
        tree = BTree(min_degree=t)
        rng = random.Random(40 + t)
        keys = rng.sample(range(1, 300), 80)
        for k in keys:
            tree.insert(k)
        rng.shuffle(keys)
        remaining = set(keys)
        for k in keys:
            result = tree.delete(k)
            assert result.ok, result.notice.text
            remaining.discard(k)
            assert tree.violations() == []
            assert tree.keys() == sorted(remaining)
        assert tree.root is None

    def test_missing_key(self):
        tree = BTree()
        tree.insert(3)
        before = tree.to_dict()
        result = tree.delete(4)
        assert result.notice.text == "Key 4 not found"
        assert tree.to_dict() == before

    def test_empty_tree(self):
        assert BTree().delete(1).notice.text == "Tree is empty"

    def test_internal_key_uses_predecessor_or_successor(self):
        tree = BTree(min_degree=2)
        for k in range(1, 11):
            tree.insert(k)
        internal = tree.root.keys[0]
        frames = tree.delete(internal).frames
        assert any("predecessor" in f.description or "successor" in f.description or
                   "Merged" in f.description for f in frames)
        assert not tree.contains(internal)


class TestBTreeSearch:
    def test_found(self):
        tree = BTree()
        for k in range(1, 20):
            tree.insert(k)
        result = tree.search(17)
        assert result.notice.text == "Key 17 found!"
        assert all("search" in f.highlights for f in result.frames[:-1])
        assert result.frames[-1].description == "Search finished"

    def test_not_found(self):
        tree = BTree()
        tree.insert(1)
        assert tree.search(2).notice.kind == NoticeKind.ERROR

    def test_reset(self):
        tree = BTree()
        tree.insert(1)
        tree.reset()
        assert tree.root is None
        assert tree.search(1).notice.text == "Tree is empty"

    def test_dict_round_trip(self):
        tree = BTree(min_degree=3)
        for k in range(30):
            tree.insert(k)
        again = BTree.from_dict(tree.to_dict())
        assert again.keys() == tree.keys()
        assert again.violations() == []


class TestBinaryHeap:
    def test_max_heap_extracts_descending(self):
        heap = BinaryHeap(HeapKind.MAX)
        for v in [5, 3, 8, 1, 9, 2]:
            heap.insert(v)
            assert heap.is_valid()
        out = []
        while len(heap):
            out.append(heap.peek())
            heap.extract_root()
            assert heap.is_valid()
        assert out == [9, 8, 5, 3, 2, 1]

    def test_min_heap_from_string(self):
        heap = BinaryHeap("min")
        for v in [5, 3, 8, 1]:
            heap.insert(v)
        assert heap.peek() == 1
        assert heap.extract_root().notice.text == "Extracted min value 1"

    def test_swap_frame_shows_values_before_swap(self):
        heap = BinaryHeap(HeapKind.MAX)
        heap.insert(1)
        frames = heap.insert(5).frames
        k = next(i for i, f in enumerate(frames) if "swap" in f.highlights)
        assert frames[k].snapshot == [1, 5]
        assert frames[k + 1].snapshot == [5, 1]
        assert frames[-1].highlights == {}

    @pytest.mark.parametrize("bad", ["7", None, True, float("nan"), float("inf")])
    def test_invalid_values(self, bad):
        heap = BinaryHeap()
        result = heap.insert(bad)
        assert result.notice.text == "Please enter a valid number"
        assert len(heap) == 0

    def test_extract_from_empty(self):
        assert BinaryHeap().extract_root().notice.text == "Heap is empty. Cannot extract max."

    def test_unknown_kind(self):
        with pytest.raises(ValueError):
            BinaryHeap("median")

    def test_clear(self):
        heap = BinaryHeap()
        heap.insert(3)
        heap.clear()
        assert heap.to_dict() == {"kind": "max", "heap": []}


class TestTrie:
    def test_insert_and_search(self):
        trie = Trie()
        assert trie.insert("Cat ").notice.text == 'Word "cat" inserted.'
        assert trie.search("cat").ok
        assert trie.contains("cat")

    def test_prefix_is_not_a_word(self):
        trie = Trie()
        trie.insert("card")
        result = trie.search("car")
        assert not result.ok
        assert "not a complete word" in result.notice.text
        assert "not-found" in result.frames[-1].highlights

    def test_missing_char(self):
        trie = Trie()
        trie.insert("dog")
        result = trie.search("dot")
        assert result.notice.text == 'Char \'t\' not found. Word "dot" does not exist.'
        assert result.frames[-1].highlights == {"not-found": ["root-d-o"]}

    def test_node_ids_spell_the_path(self):
        trie = Trie()
        result = trie.insert("ab")
        assert result.frames[-1].highlights == {"found": ["root-a-b"]}

    def test_rejects_non_letters(self):
        trie = Trie()
        assert trie.insert("c4t").notice.text == "Please enter letters only (a-z)"
        assert trie.word_count() == 0
        assert trie.history == []

    def test_words_with_prefix(self):
        trie = Trie()
        for w in ["car", "cart", "care", "dog"]:
            trie.insert(w)
        assert trie.words_with_prefix("car") == ["car", "care", "cart"]
        assert trie.words_with_prefix("x") == []
        assert trie.word_count() == 4

    def test_history_and_clear(self):
        trie = Trie()
        trie.insert("a")
        trie.search("b")
        assert trie.history == [("INSERT", "a"), ("SEARCH", "b")]
        trie.clear()
        assert trie.to_dict()["words"] == []
        assert trie.history == []

    def test_earlier_frames_are_not_mutated(self):
        trie = Trie()
        frames = trie.insert("ab").frames
        first = frames[0].snapshot
        trie.insert("ac")
        assert first["children"] == []


class TestRedBlackTree:
    def test_first_key_is_black_root(self):
        tree = RedBlackTree()
        assert tree.insert(10).notice.text == "Inserted 10 as root"
        assert tree.root.color == Color.BLACK

    def test_invariants_after_random_inserts(self):
        tree = RedBlackTree()
        keys = random.Random(3).sample(range(1, 500), Limits.rbtree_max_nodes)
        for k in keys:
            assert tree.insert(k).ok
            assert tree.violations() == []
        assert tree.keys() == sorted(keys)
        stats = tree.stats()
        assert stats.node_count == len(keys)
        assert stats.black_height > 0
        assert stats.height <= 2 * stats.black_height

    def test_ascending_inserts_rotate(self):
        tree = RedBlackTree()
        tree.insert(1)
        tree.insert(2)
        frames = tree.insert(3).frames
        assert any("rotate" in f.highlights for f in frames)
        assert tree.root.key == 2
        assert tree.root.left.color == tree.root.right.color == Color.RED

    def test_inner_child_double_rotation(self):
        tree = RedBlackTree()
        for k in (30, 10):
            tree.insert(k)
        frames = tree.insert(20).frames
        assert sum("rotate" in f.highlights for f in frames) == 2
        assert tree.root.key == 20
        assert tree.violations() == []

    def test_red_uncle_recolors(self):
        tree = RedBlackTree()
        for k in (20, 10, 30):
            tree.insert(k)
        frames = tree.insert(5).frames
        recolor = next(f for f in frames if "recolor" in f.highlights)
        assert len(recolor.highlights["recolor"]) == 3
        assert tree.root.color == Color.BLACK
        assert tree.root.left.color == tree.root.right.color == Color.BLACK

    def test_last_frame_is_committed_tree(self):
        tree = RedBlackTree()
        for k in (5, 3):
            tree.insert(k)
        frames = tree.insert(8).frames
        assert frames[-1].highlights == {}
        assert frames[-1].snapshot == tree.to_dict()

    def test_duplicate_and_invalid_rejected(self):
        tree = RedBlackTree()
        tree.insert(4)
        before = tree.to_dict()
        result = tree.insert(4)
        assert result.notice.text == "Value 4 already exists!"
        assert result.frames == []
        assert tree.insert("x").notice.text == "Please enter a valid number"
        assert tree.to_dict() == before

    def test_capacity(self):
        tree = RedBlackTree()
        for k in range(Limits.rbtree_max_nodes):
            tree.insert(k)
        assert tree.insert(-1).notice.kind == NoticeKind.ERROR

    def test_search(self):
        tree = RedBlackTree()
        for k in (8, 4, 12, 2, 6):
            tree.insert(k)
        hit = tree.search(6)
        assert hit.notice.text == "Found value 6!"
        assert "found" in hit.frames[-2].highlights
        assert hit.frames[-1].description == "Search finished"
        assert tree.search(7).notice.text == "Value 7 not in tree."
        assert RedBlackTree().search(1).notice.text == "Tree is empty"

    def test_reset(self):
        tree = RedBlackTree()
        tree.insert(1)
        tree.reset()
        assert tree.root is None and tree.stats().node_count == 0

    def test_insert_random_is_unique(self):
        tree = RedBlackTree()
        rng = random.Random(2)
        for _ in range(20):
            assert tree.insert_random(rng, low=1, high=30).ok
        assert len(set(tree.keys())) == 20
        assert tree.violations() == []


class TestStack:
    def test_lifo_order(self):
        stack = Stack()
        for v in (1, 2, 3):
            assert stack.push(v).ok
        assert stack.peek().notice.text == "Top element is: 3"
        assert stack.pop().notice.text == "Popped 3"
        assert stack.values() == [1, 2]

    def test_pop_frame_shows_element_in_place(self):
        stack = Stack()
        stack.push(7)
        frames = stack.pop().frames
        assert frames[0].snapshot == [{"id": 0, "value": 7}]
        assert frames[0].highlights == {"pop": [0]}
        assert frames[-1].snapshot == [] and frames[-1].highlights == {}

    def test_overflow_and_underflow(self):
        stack = Stack(capacity=2)
        stack.push(1)
        stack.push(2)
        assert stack.is_full
        assert stack.push(3).notice.text == "Stack overflow: capacity is 2"
        stack.clear()
        assert stack.pop().notice.text == "Cannot pop from empty stack"
        assert stack.peek().notice.kind == NoticeKind.ERROR

    def test_rejects_non_numbers(self):
        stack = Stack()
        assert stack.push("4").notice.text == "Please enter a valid number"
        assert len(stack) == 0

    def test_history(self):
        stack = Stack()
        stack.push(5)
        stack.pop()
        assert stack.clear().text == "Stack is already empty"
        assert stack.to_dict()["history"] == [
            {"operation": "PUSH", "value": 5, "size": 1},
            {"operation": "POP", "value": 5, "size": 0},
        ]


class TestQueue:
    def test_fifo_order(self):
        queue = Queue()
        for v in (1, 2, 3):
            queue.enqueue(v)
        assert queue.peek().notice.text == "Front element is: 1"
        assert queue.dequeue().notice.text == "Dequeued 1"
        assert queue.values() == [2, 3]

    def test_ids_stay_with_elements(self):
        queue = Queue()
        for v in (10, 20):
            queue.enqueue(v)
        queue.dequeue()
        frames = queue.peek().frames
        assert frames[0].highlights == {"peek": [1]}

    def test_capacity_and_empty(self):
        queue = Queue(capacity=1)
        queue.enqueue(1)
        assert not queue.enqueue(2).ok
        assert queue.clear().text == "Cleared 1 elements from queue"
        assert queue.dequeue().notice.text == "Cannot dequeue from empty queue"

    def test_zero_capacity(self):
        with pytest.raises(ValueError):
            Queue(capacity=0)
