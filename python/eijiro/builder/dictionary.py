"""Dictionary builder: parsed entries to a sorted, grouped Dictionary.

Steps:
    1. Sort entries by (headword, Field, origin order)
    2. Open a new group whenever the headword changes
    3. Append each Field to the open group
    4. Insert each unique headword into the headword index with its group id

Because Fields are compared structurally before origin order, two
senses of one headword end up ordered by content, not by corpus
position. The "input" entry order sorts by headword only and keeps
corpus order inside each group.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from ..errors import DuplicateInsertionError
from ..fst import MapBuilder
from ..ingest.corpus import ParsedEntry, iter_entries
from ..ingest.grammar import FieldGrammar
from ..schema import Dictionary, Field

STRUCTURAL = "structural"
INPUT = "input"
ENTRY_ORDERS = (STRUCTURAL, INPUT)


@dataclass
class BuildStats:
    """Statistics from a build operation."""

    total_entries: int = 0
    unique_headwords: int = 0
    largest_group: int = 0
    index_bytes: int = 0

    @classmethod
    def collect(cls, dictionary: Dictionary) -> "BuildStats":
        """Compute statistics for a built dictionary."""
        return cls(
            total_entries=dictionary.count_fields(),
            unique_headwords=len(dictionary),
            largest_group=max((len(g) for g in dictionary.groups), default=0),
            index_bytes=len(dictionary.index.to_bytes()),
        )


def _sort_key(entry_order: str):
    if entry_order == STRUCTURAL:
        return lambda e: (e.headword, e.field.sort_key(), e.origin_order)
    if entry_order == INPUT:
        return lambda e: (e.headword, e.origin_order)
    raise ValueError(
        f"Unknown entry order: {entry_order}. Available: {list(ENTRY_ORDERS)}"
    )


def build(
    entries: Iterable[ParsedEntry],
    entry_order: str = STRUCTURAL,
) -> Dictionary:
    """Build a Dictionary from parsed entries.

    Args:
        entries: Parsed (headword, Field, origin order) entries.
        entry_order: "structural" or "input" ordering within a group.

    Returns:
        The built Dictionary.

    Raises:
        DuplicateInsertionError: If the index rejects a headword,
            annotated with the 1-based line of the offending entry.
    """
    ordered = sorted(entries, key=_sort_key(entry_order))

    index = MapBuilder()
    groups: list[list[Field]] = []
    previous: Optional[str] = None
    for entry in ordered:
        if entry.headword != previous:
            try:
                index.insert(entry.headword, len(groups))
            except DuplicateInsertionError as e:
                raise e.at_line(entry.origin_order + 1) from None
            groups.append([])
            previous = entry.headword
        groups[-1].append(entry.field)

    return Dictionary(
        index=index.finish(),
        groups=tuple(tuple(group) for group in groups),
    )


class DictionaryBuilder:
    """Collects corpus entries and builds a Dictionary from them."""

    def __init__(
        self,
        entry_order: str = STRUCTURAL,
        grammar: Optional[FieldGrammar] = None,
    ):
        """Initialize builder.

        Args:
            entry_order: "structural" (default) or "input".
            grammar: Grammar used by add_text (default: ■/◆ markers).
        """
        _sort_key(entry_order)
        self.entry_order = entry_order
        self.grammar = grammar
        self._entries: list[ParsedEntry] = []

    def add_entry(
        self,
        headword: str,
        field: Field,
        origin_order: Optional[int] = None,
    ) -> None:
        """Add one entry; origin order defaults to insertion position."""
        if origin_order is None:
            origin_order = len(self._entries)
        self._entries.append(ParsedEntry(headword, field, origin_order))

    def add_entries(self, entries: Iterable[ParsedEntry]) -> None:
        """Add already parsed entries."""
        self._entries.extend(entries)

    def add_text(self, text: str) -> int:
        """Parse a whole corpus and add its entries.

        Nothing is added if any line is malformed.

        Returns:
            Number of entries added.
        """
        parsed = list(iter_entries(text, self.grammar))
        self._entries.extend(parsed)
        return len(parsed)

    def get_entry_count(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def build(self) -> Dictionary:
        """Build a Dictionary from all collected entries."""
        return build(self._entries, self.entry_order)
