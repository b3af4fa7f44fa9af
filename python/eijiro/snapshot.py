"""Binary snapshot of a built Dictionary.

A snapshot lets later runs skip re-parsing the corpus. It is an
unversioned blob read only by this package.

Layout (all integers little-endian u64 unless noted):
    index length, index bytes (marisa RecordTrie, see eijiro.fst.map)
    group count
        field count
            ident tag (u8: 0 absent, 1 present) [+ string]
            explanation body string, complement count, complement strings
            example count
                sentence string, complement count, complement strings

A string is its UTF-8 byte length followed by the bytes.
"""

import struct
from pathlib import Path
from typing import Optional

from .errors import CorruptSnapshot
from .fst import Map
from .schema import Complement, Dictionary, Example, Explanation, Field

U64 = struct.Struct("<Q")
U8 = struct.Struct("<B")


class _Writer:
    def __init__(self):
        self.buf = bytearray()

    def u64(self, n: int) -> None:
        self.buf += U64.pack(n)

    def u8(self, n: int) -> None:
        self.buf += U8.pack(n)

    def blob(self, data: bytes) -> None:
        self.u64(len(data))
        self.buf += data

    def string(self, text: str) -> None:
        self.blob(text.encode("utf-8"))

    def complements(self, complements: tuple[Complement, ...]) -> None:
        self.u64(len(complements))
        for c in complements:
            self.string(c.body)

    def field(self, field: Field) -> None:
        if field.ident is None:
            self.u8(0)
        else:
            self.u8(1)
            self.string(field.ident)
        self.string(field.explanation.body)
        self.complements(field.explanation.complements)
        self.u64(len(field.examples))
        for example in field.examples:
            self.string(example.sentence)
            self.complements(example.complements)


class _Reader:
    def __init__(self, data: bytes):
        self.data = data
        self.pos = 0

    def remaining(self) -> int:
        return len(self.data) - self.pos

    def take(self, n: int) -> bytes:
        if n > self.remaining():
            raise CorruptSnapshot(
                f"Snapshot truncated: need {n} bytes at offset {self.pos}, "
                f"have {self.remaining()}"
            )
        chunk = self.data[self.pos:self.pos + n]
        self.pos += n
        return chunk

    def u64(self) -> int:
        return U64.unpack(self.take(U64.size))[0]

    def u8(self) -> int:
        return U8.unpack(self.take(U8.size))[0]

    def count(self, item_size: int) -> int:
        """Read a sequence length; each item needs at least item_size bytes."""
        n = self.u64()
        if n * item_size > self.remaining():
            raise CorruptSnapshot(
                f"Declared length {n} at offset {self.pos - U64.size} "
                f"exceeds remaining {self.remaining()} bytes"
            )
        return n

    def blob(self) -> bytes:
        return self.take(self.count(1))

    def string(self) -> str:
        raw = self.blob()
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise CorruptSnapshot(f"Invalid UTF-8 in snapshot: {e}") from e

    def complements(self) -> tuple[Complement, ...]:
        return tuple(Complement(self.string()) for _ in range(self.count(U64.size)))

    def field(self) -> Field:
        tag = self.u8()
        if tag == 0:
            ident = None
        elif tag == 1:
            ident = self.string()
        else:
            raise CorruptSnapshot(f"Invalid ident tag {tag} at offset {self.pos - 1}")
        explanation = Explanation(self.string(), self.complements())
        examples = tuple(
            Example(self.string(), self.complements())
            for _ in range(self.count(2 * U64.size))
        )
        return Field(ident=ident, explanation=explanation, examples=examples)


def _check_group_ids(index: Map, group_count: int) -> None:
    previous: Optional[str] = None
    try:
        for key, group_id in index.stream():
            if group_id >= group_count:
                raise CorruptSnapshot(
                    f"Headword {key!r} points to group {group_id} of {group_count}"
                )
            if key == previous:
                raise CorruptSnapshot(f"Headword {key!r} stored twice")
            previous = key
    except (UnicodeDecodeError, struct.error) as e:
        raise CorruptSnapshot(f"Invalid headword record: {e}") from e


def save(dictionary: Dictionary) -> bytes:
    """Serialize a Dictionary to snapshot bytes."""
    w = _Writer()
    w.blob(dictionary.index.to_bytes())
    w.u64(len(dictionary.groups))
    for group in dictionary.groups:
        w.u64(len(group))
        for field in group:
            w.field(field)
    return bytes(w.buf)


def load(data: bytes) -> Dictionary:
    """Restore a Dictionary from snapshot bytes.

    Raises:
        CorruptSnapshot: If the index is invalid, any declared length
            disagrees with the buffer, or a headword points past the groups.
    """
    r = _Reader(bytes(data))
    index = Map.from_bytes(r.blob())

    # smallest field: tag + body length + two counts
    min_field = U8.size + 3 * U64.size
    groups = tuple(
        tuple(r.field() for _ in range(r.count(min_field)))
        for _ in range(r.count(U64.size))
    )
    if r.remaining():
        raise CorruptSnapshot(f"{r.remaining()} trailing bytes after field groups")
    if len(groups) != len(index):
        raise CorruptSnapshot(
            f"Snapshot has {len(groups)} field groups for {len(index)} headwords"
        )
    _check_group_ids(index, len(groups))
    return Dictionary(index=index, groups=groups)


def save_file(dictionary: Dictionary, filepath: Path | str) -> int:
    """Write a snapshot file; returns the number of bytes written."""
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)
    data = save(dictionary)
    filepath.write_bytes(data)
    return len(data)


def load_file(filepath: Path | str) -> Dictionary:
    """Read a snapshot file."""
    return load(Path(filepath).read_bytes())
