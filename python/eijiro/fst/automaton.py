"""Automata that drive searches over a Map.

A search extends key prefixes one character at a time and steps the
automaton alongside. The automaton decides which branches are still
worth following (can_match), which complete keys are accepted
(is_match), and may narrow the characters worth trying (next_chars).

Usage:
    from eijiro.fst import Levenshtein

    aut = Levenshtein("color", 1)
    for key, value in headword_map.search(aut):
        ...
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from ..errors import InvalidQuery

# Ceiling on the number of DFA states a Levenshtein automaton may build.
DEFAULT_STATE_LIMIT = 10_000

DEAD = -1

# (indices, values) of the sparse Levenshtein row; see _step.
_Row = tuple[tuple[int, ...], tuple[int, ...]]


class Automaton(ABC):
    """Base class for character-level automata."""

    @abstractmethod
    def start(self) -> Any:
        """Return the start state."""

    @abstractmethod
    def is_match(self, state: Any) -> bool:
        """True if the key read so far is accepted."""

    def can_match(self, state: Any) -> bool:
        """True if some continuation of the key read so far may be accepted."""
        return True

    def next_chars(self, state: Any) -> Optional[frozenset[str]]:
        """Characters that can keep the state alive, or None for any."""
        return None

    @abstractmethod
    def accept(self, state: Any, char: str) -> Any:
        """Return the state reached by reading one character."""


class _LevenshteinDfa:
    """Character-level DFA for all strings within `distance` edits of `query`.

    States are sparse rows of the edit-distance table: only positions whose
    distance is still within budget are kept. Transitions are computed for
    each distinct character of the query plus one shared "other" class.
    """

    def __init__(self, query: str, distance: int, state_limit: int):
        self.query = query
        self.distance = distance
        self.transitions: list[dict[str, int]] = []
        self.other: list[int] = []
        self.live: list[frozenset[str]] = []
        self.matches: list[bool] = []

        n = len(query)
        alphabet = sorted(set(query))
        width = min(distance, n) + 1
        start: _Row = (tuple(range(width)), tuple(range(width)))

        ids: dict[_Row, int] = {start: 0}
        rows: list[_Row] = [start]

        def intern(row: _Row) -> int:
            if not row[0]:
                return DEAD
            sid = ids.get(row)
            if sid is None:
                if len(rows) >= state_limit:
                    raise InvalidQuery(
                        f"Levenshtein automaton for {query!r} with distance "
                        f"{distance} exceeds {state_limit} states"
                    )
                sid = len(rows)
                ids[row] = sid
                rows.append(row)
            return sid

        i = 0
        while i < len(rows):
            row = rows[i]
            moves = {c: intern(self._step(row, c)) for c in alphabet}
            self.transitions.append(moves)
            self.live.append(frozenset(c for c, t in moves.items() if t != DEAD))
            self.other.append(intern(self._step(row, None)))
            self.matches.append(row[0][-1] == n)
            i += 1

    def _step(self, row: _Row, char: Optional[str]) -> _Row:
        indices, values = row
        query = self.query
        n = len(query)
        d = self.distance

        new_indices: list[int] = []
        new_values: list[int] = []
        if indices[0] == 0 and values[0] < d:
            new_indices.append(0)
            new_values.append(values[0] + 1)

        for j, (i, value) in enumerate(zip(indices, values)):
            if i == n:
                break
            cost = 0 if query[i] == char else 1
            value += cost
            if new_indices and new_indices[-1] == i:
                value = min(value, new_values[-1] + 1)
            if j + 1 < len(indices) and indices[j + 1] == i + 1:
                value = min(value, values[j + 1] + 1)
            if value <= d:
                new_indices.append(i + 1)
                new_values.append(value)

        return tuple(new_indices), tuple(new_values)

    def __len__(self) -> int:
        return len(self.matches)

    def step(self, sid: int, char: str) -> int:
        nxt = self.transitions[sid].get(char)
        if nxt is None:
            return self.other[sid]
        return nxt




class Levenshtein(Automaton):
    """Accepts keys within `distance` single-character edits of `query`.

    Edits are insertion, deletion and substitution of one Unicode
    character; a transposition counts as two edits. A dead state is None.

    Raises:
        InvalidQuery: If distance is negative or the automaton would need
            more than state_limit states.
    """

    def __init__(
        self,
        query: str,
        distance: int,
        state_limit: int = DEFAULT_STATE_LIMIT,
    ):
        if distance < 0:
            raise InvalidQuery(f"Edit distance must be non-negative, got {distance}")
        self.query = query
        self.distance = distance
        self._dfa = _LevenshteinDfa(query, distance, state_limit)

    def __repr__(self) -> str:
        return (
            f"Levenshtein({self.query!r}, {self.distance}, "
            f"states={len(self._dfa)})"
        )

    @property
    def state_count(self) -> int:
        return len(self._dfa)

    def start(self) -> int:
        return 0

    def is_match(self, state: Optional[int]) -> bool:
        return state is not None and self._dfa.matches[state]

    def can_match(self, state: Optional[int]) -> bool:
        return state is not None

    def next_chars(self, state: Optional[int]) -> Optional[frozenset[str]]:
        # Once a non-query character kills the row, only query characters matter.
        if state is None:
            return frozenset()
        if self._dfa.other[state] == DEAD:
            return self._dfa.live[state]
        return None

    def accept(self, state: Optional[int], char: str) -> Optional[int]:
        if state is None:
            return None
        nxt = self._dfa.step(state, char)
        if nxt == DEAD:
            return None
        return nxt
