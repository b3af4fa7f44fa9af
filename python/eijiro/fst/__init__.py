"""Headword index module for eijiro.

Provides an immutable sorted map from text keys to group ids, stored in
a marisa_trie.RecordTrie, and the automata used to search it.

Usage:
    from eijiro.fst import Map, Levenshtein

    m = Map.from_items([("bar", 0), ("baz", 1), ("foo", 2)])
    m.get("baz")                           # 1
    list(m.search(Levenshtein("bat", 1)))  # [("bar", 0), ("baz", 1)]
"""

from .automaton import DEFAULT_STATE_LIMIT, Automaton, Levenshtein
from .map import MAX_VALUE, RECORD_FORMAT, Map, MapBuilder

__all__ = [
    "DEFAULT_STATE_LIMIT",
    "MAX_VALUE",
    "RECORD_FORMAT",
    "Automaton",
    "Levenshtein",
    "Map",
    "MapBuilder",
]
