"""eijiro - English-Japanese dictionary toolkit.

Parses an Eijiro-style dictionary corpus (one "■headword : ..." entry
per line), indexes its headwords in a marisa trie, caches
the result as a binary snapshot, and answers edit-distance lookups.

Core concepts:
    - A line yields a headword and a Field (explanation, complements,
      examples with their own complements)
    - Lines sharing a headword are grouped under one index key
    - Lookups walk the index with a Levenshtein automaton, so
      matches come out in sorted headword order

Usage:
    import eijiro

    dictionary = eijiro.parse(open("EIJIRO.txt", encoding="utf-8").read())
    blob = eijiro.save(dictionary)
    dictionary = eijiro.load(blob)

    for headword, fields in eijiro.search(dictionary, "awkard", 1):
        print(headword, fields[0].explanation.body)
"""

from typing import Optional

from .builder import build
from .errors import (
    CorruptSnapshot,
    DuplicateInsertionError,
    EijiroError,
    InvalidQuery,
    MalformedEntry,
    OutOfOrderError,
)
from .ingest import FieldGrammar, iter_entries, parse_field
from .lookup import Match, search
from .schema import Complement, Dictionary, Example, Explanation, Field
from .snapshot import load, save

__version__ = "0.1.0"


def parse(
    text: str,
    entry_order: str = "structural",
    grammar: Optional[FieldGrammar] = None,
) -> Dictionary:
    """Parse a whole corpus and build its Dictionary.

    Raises:
        MalformedEntry: For the first malformed line, with its line number.
        DuplicateInsertionError: If the index rejects a headword.
    """
    return build(iter_entries(text, grammar), entry_order=entry_order)


__all__ = [
    "Complement",
    "CorruptSnapshot",
    "Dictionary",
    "DuplicateInsertionError",
    "EijiroError",
    "Example",
    "Explanation",
    "Field",
    "FieldGrammar",
    "InvalidQuery",
    "MalformedEntry",
    "Match",
    "OutOfOrderError",
    "build",
    "load",
    "parse",
    "parse_field",
    "save",
    "search",
]
