"""Lookup engine: approximate headword search over a Dictionary.

Matches come out in ascending byte order of headword, straight from the
index walk. Results are lazy and single-use; call search again to
iterate again.

Usage:
    from eijiro.lookup import search

    for headword, fields in search(dictionary, "colour", 1):
        print(headword, len(fields))
"""

from typing import Iterator, NamedTuple, Optional

from .fst import DEFAULT_STATE_LIMIT, Levenshtein
from .schema import Dictionary, Field


class Match(NamedTuple):
    """One search hit: a headword and its field group."""

    headword: str
    fields: tuple[Field, ...]


def search(
    dictionary: Dictionary,
    query: str,
    max_edits: int = 0,
    state_limit: int = DEFAULT_STATE_LIMIT,
) -> Iterator[Match]:
    """Find headwords within max_edits edits of query.

    Args:
        dictionary: Dictionary to search.
        query: Query string.
        max_edits: Maximum number of insertions, deletions and
            substitutions. 0 means exact match.
        state_limit: Ceiling on Levenshtein automaton states.

    Returns:
        Lazy iterator of Match in ascending headword order.

    Raises:
        InvalidQuery: Immediately, if the automaton cannot be built.
    """
    automaton = Levenshtein(query, max_edits, state_limit=state_limit)
    return _matches(dictionary, automaton)


def _matches(dictionary: Dictionary, automaton: Levenshtein) -> Iterator[Match]:
    groups = dictionary.groups
    for key, group_id in dictionary.index.search(automaton):
        yield Match(key, groups[group_id])


def lookup(dictionary: Dictionary, headword: str) -> Optional[Match]:
    """Exact lookup of a single headword."""
    fields = dictionary.get(headword)
    if fields is None:
        return None
    return Match(headword, fields)


def count_matches(
    dictionary: Dictionary,
    query: str,
    max_edits: int = 0,
    state_limit: int = DEFAULT_STATE_LIMIT,
) -> int:
    """Count matching headwords without keeping them."""
    return sum(1 for _ in search(dictionary, query, max_edits, state_limit))
