"""Sorted headword map backed by a marisa_trie.RecordTrie.

Each key carries one "<I" record (an unsigned 32-bit group id). Keys
are stored in label order; iteration and automaton search both yield
keys in ascending code point order, which for UTF-8 text is the same
as ascending byte order.

The serialized form is marisa's own binary trie (tobytes/frombytes).
"""

import struct
from functools import cached_property
from typing import Iterable, Iterator, Optional

import marisa_trie

from ..errors import CorruptSnapshot, DuplicateInsertionError, OutOfOrderError
from .automaton import Automaton

RECORD_FORMAT = "<I"
MAX_VALUE = 2 ** (8 * struct.calcsize(RECORD_FORMAT)) - 1


def _new_trie(items=None) -> marisa_trie.RecordTrie:
    if items is None:
        return marisa_trie.RecordTrie(RECORD_FORMAT, order=marisa_trie.LABEL_ORDER)
    return marisa_trie.RecordTrie(RECORD_FORMAT, items, order=marisa_trie.LABEL_ORDER)


class MapBuilder:
    """Collects keys inserted in sorted order and builds a Map.

    Raises DuplicateInsertionError (or its subclass OutOfOrderError) when a
    key is equal to, or sorts before, the previously inserted key.
    """

    def __init__(self):
        self._items: list[tuple[str, tuple[int]]] = []
        self._last: Optional[str] = None
        self._finished = False

    def __len__(self) -> int:
        return len(self._items)

    def insert(self, key: str, value: int) -> None:
        """Insert one non-empty key with a value in 0 .. MAX_VALUE."""
        if self._finished:
            raise RuntimeError("MapBuilder already finished")
        if not key:
            raise ValueError("Map keys must be non-empty")
        if not 0 <= value <= MAX_VALUE:
            raise ValueError(f"Map values must be in 0..{MAX_VALUE}, got {value}")
        self._check_last_key(key)
        self._items.append((key, (value,)))

    def extend(self, items: Iterable[tuple[str, int]]) -> None:
        """Insert many (key, value) pairs."""
        for key, value in items:
            self.insert(key, value)

    def finish(self) -> "Map":
        """Build the trie and return the finished Map."""
        self._finished = True
        return Map(_new_trie(self._items))

    def _check_last_key(self, key: str) -> None:
        last = self._last
        if last is not None:
            if key == last:
                raise DuplicateInsertionError(last, key)
            if key < last:
                raise OutOfOrderError(last, key)
        self._last = key


class Map:
    """Immutable map from text keys to group ids.

    Supports exact lookup, ordered streaming and automaton-driven search.
    """

    def __init__(self, trie: marisa_trie.RecordTrie):
        self._trie = trie

    @classmethod
    def from_items(cls, items: Iterable[tuple[str, int]]) -> "Map":
        """Build a Map from (key, value) pairs already sorted by key."""
        builder = MapBuilder()
        builder.extend(items)
        return builder.finish()

    def __len__(self) -> int:
        return len(self._trie)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def __iter__(self) -> Iterator[str]:
        return self.keys()

    def __repr__(self) -> str:
        return f"Map(keys={len(self)})"

    @cached_property
    def alphabet(self) -> tuple[str, ...]:
        """Every character used by some key, in code point order."""
        return tuple(sorted(set("".join(self._trie.keys()))))

    @cached_property
    def _present(self) -> frozenset[str]:
        return frozenset(self.alphabet)

    def get(self, key: str) -> Optional[int]:
        """Get the value of a key, or None if absent."""
        records = self._trie.get(key)
        if not records:
            return None
        return records[0][0]

    def stream(self) -> Iterator[tuple[str, int]]:
        """Iterate all (key, value) pairs in sorted key order."""
        for key, (value,) in sorted(self._trie.items()):
            yield key, value

    def keys(self) -> Iterator[str]:
        for key, _ in self.stream():
            yield key

    def values(self) -> Iterator[int]:
        for _, value in self.stream():
            yield value

    def search(self, automaton: Automaton) -> Iterator[tuple[str, int]]:
        """Iterate (key, value) pairs accepted by an automaton, in key order.

        Prefixes are extended one character at a time, in code point order.
        A branch is abandoned as soon as the automaton reports that no
        continuation can match or the trie holds no key with that prefix.
        A key is yielded before any longer key that extends it.
        """
        state = automaton.start()
        if not automaton.can_match(state):
            return

        stack = [("", state, iter(self._next_chars(automaton, state)))]
        while stack:
            prefix, state, chars = stack[-1]
            for char in chars:
                next_state = automaton.accept(state, char)
                if not automaton.can_match(next_state):
                    continue
                key = prefix + char
                if not self._trie.has_keys_with_prefix(key):
                    continue
                if automaton.is_match(next_state):
                    value = self.get(key)
                    if value is not None:
                        yield key, value
                stack.append(
                    (key, next_state, iter(self._next_chars(automaton, next_state)))
                )
                break
            else:
                stack.pop()

    def _next_chars(self, automaton: Automaton, state) -> Iterable[str]:
        allowed = automaton.next_chars(state)
        if allowed is None:
            return self.alphabet
        return sorted(c for c in allowed if c in self._present)

    def to_bytes(self) -> bytes:
        """Serialize with marisa's binary trie format."""
        return self._trie.tobytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> "Map":
        """Restore a Map from its serialized form.

        Raises:
            CorruptSnapshot: If marisa rejects the blob.
        """
        try:
            trie = _new_trie().frombytes(bytes(data))
        except (RuntimeError, ValueError, MemoryError) as e:
            raise CorruptSnapshot(f"Invalid headword index blob: {e}") from e
        return cls(trie)
