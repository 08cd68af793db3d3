"""
trees/
------
Interactive structures whose operations return animation frames.

    from trees import BTree, BinaryHeap, HeapKind, RedBlackTree, Stack, Queue, Trie
"""

from trees.frame          import TreeFrame, OperationResult
from trees.btree          import BTree, BTreeNode, BTreeStats
from trees.binary_heap    import BinaryHeap, HeapKind
from trees.red_black_tree import RedBlackTree, RBNode, RBTreeStats, Color
from trees.linear         import Stack, Queue, Item
from trees.trie           import Trie, TrieNode

__all__ = [
    "TreeFrame", "OperationResult",
    "BTree", "BTreeNode", "BTreeStats",
    "BinaryHeap", "HeapKind",
    "RedBlackTree", "RBNode", "RBTreeStats", "Color",
    "Stack", "Queue", "Item",
    "Trie", "TrieNode",
]
