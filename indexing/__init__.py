"""
LeapJoin Indexing Module
========================
Trie iterators over in-memory sorted relations.

Components:
  - trie_index: two-level cursor with seek/next/up/down/reset
"""

from indexing.trie_index import TrieIndex, TrieStateError, Upper, Lower, Position

__all__ = ["TrieIndex", "TrieStateError", "Upper", "Lower", "Position"]
