"""A character trie used to look up registered keywords and functions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass
class _TrieNode:
    # ``valid`` marks that the path from the root to this node is a stored word.
    valid: bool = False
    children: Dict[str, "_TrieNode"] = field(default_factory=dict)


class Trie:
    """Set of strings stored as a character tree."""

    def __init__(self) -> None:
        self._root = _TrieNode()

    def insert(self, word: str) -> None:
        """Add ``word`` to the trie."""
        node = self._root
        for ch in word:
            node = node.children.setdefault(ch, _TrieNode())
        node.valid = True

    def remove(self, word: str) -> None:
        """Remove ``word`` if present; missing words are ignored."""
        node = self._find(word)
        if node is not None:
            node.valid = False

    def exists(self, word: str) -> bool:
        """Return True if ``word`` was inserted and not removed."""
        node = self._find(word)
        return node is not None and node.valid

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.exists(word)

    def _find(self, word: str) -> Optional[_TrieNode]:
        node = self._root
        for ch in word:
            node = node.children.get(ch)
            if node is None:
                return None
        return node