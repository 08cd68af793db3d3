"""
trie.py — Prefix Tree
======================
Lower-case a–z words only.  Node ids spell the path from the root
("root", "root-c", "root-c-a", …) so they stay stable however the trie
grows.

insert() and search() return the TreeFrames of the walk.  Each frame's
highlights map a node state to the ids in that state:

    highlight : node currently being visited
    found     : last node of a word that was inserted / found
    not-found : node where the search path broke off
"""

import copy
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from engine.notice import Notice
from trees.frame import OperationResult, TreeFrame

log = logging.getLogger(__name__)

_WORD_RE = re.compile(r"^[a-z]+$")


@dataclass
class TrieNode:
    id:          str
    char:        str
    children:    Dict[str, "TrieNode"] = field(default_factory=dict)
    end_of_word: bool                  = False

    def to_dict(self) -> dict:
        return {
            "id":          self.id,
            "char":        self.char,
            "end_of_word": self.end_of_word,
            "children":    [self.children[c].to_dict() for c in sorted(self.children)],
        }


def _new_root() -> TrieNode:
    return TrieNode("root", "root")


class Trie:
    """
    Attributes:
        root    : Sentinel root node (char "root").
        history : (operation, word) pairs, newest last.
    """

    def __init__(self):
        self.root:    TrieNode               = _new_root()
        self.history: List[Tuple[str, str]] = []

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def insert(self, word: str) -> OperationResult:
        word = (word or "").strip().lower()
        if not _WORD_RE.match(word):
            log.warning("trie insert rejected: %r", word)
            return OperationResult(Notice.error("Please enter letters only (a-z)"))

        frames: List[TreeFrame] = []
        root = copy.deepcopy(self.root)
        node = root
        for char in word:
            frames.append(self._frame(root, f"At node '{node.id}'. Looking for char '{char}'...",
                                      highlight=[node.id]))
            child = node.children.get(char)
            if child is None:
                child = TrieNode(f"{node.id}-{char}", char)
                node.children[char] = child
                text = f"Char '{char}' not found. Creating new node."
            else:
                text = f"Char '{char}' found. Traversing..."
            node = child
            frames.append(self._frame(root, text, highlight=[node.id]))
        node.end_of_word = True

        frames.append(self._frame(root, f'Word "{word}" inserted.', found=[node.id]))
        self.root = root
        self.history.append(("INSERT", word))
        log.info("trie insert %s", word)
        return OperationResult(Notice.success(f'Word "{word}" inserted.'), frames)

    def search(self, word: str) -> OperationResult:
        word = (word or "").strip().lower()
        if not _WORD_RE.match(word):
            return OperationResult(Notice.error("Please enter letters only (a-z)"))

        frames: List[TreeFrame] = []
        node = self.root
        self.history.append(("SEARCH", word))
        for char in word:
            frames.append(self._frame(self.root, f"At node '{node.id}'. Looking for char '{char}'...",
                                      highlight=[node.id]))
            child = node.children.get(char)
            if child is None:
                text = f"Char '{char}' not found. Word \"{word}\" does not exist."
                frames.append(self._frame(self.root, text, **{"not-found": [node.id]}))
                return OperationResult(Notice.error(text), frames)
            node = child

        if node.end_of_word:
            text = f'Word "{word}" found!'
            frames.append(self._frame(self.root, text, found=[node.id]))
            return OperationResult(Notice.success(text), frames)

        text = f"Prefix \"{word}\" found, but it's not a complete word."
        frames.append(self._frame(self.root, text, **{"not-found": [node.id]}))
        return OperationResult(Notice.error(text), frames)

    def clear(self) -> Notice:
        self.root = _new_root()
        self.history = []
        return Notice.info("Trie cleared")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def contains(self, word: str) -> bool:
        node = self._find(word.lower())
        return node is not None and node.end_of_word

    def words_with_prefix(self, prefix: str = "") -> List[str]:
        prefix = prefix.lower()
        start = self._find(prefix)
        if start is None:
            return []
        out: List[str] = []
        stack = [(start, prefix)]
        while stack:
            node, spelled = stack.pop()
            if node.end_of_word:
                out.append(spelled)
            for char, child in node.children.items():
                stack.append((child, spelled + char))
        return sorted(out)

    def word_count(self) -> int:
        return len(self.words_with_prefix(""))

    def _find(self, prefix: str):
        node = self.root
        for char in prefix:
            node = node.children.get(char)
            if node is None:
                return None
        return node

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    @staticmethod
    def _frame(root: TrieNode, description: str, **states: List[str]) -> TreeFrame:
        return TreeFrame(description, root.to_dict(), dict(states))

    def to_dict(self) -> dict:
        return {
            "root":    self.root.to_dict(),
            "words":   self.words_with_prefix(""),
            "history": [{"operation": op, "value": w} for op, w in self.history],
        }
