"""Entry schema and data structures for eijiro.

Core concept:
    - Each corpus line yields one headword and one Field
    - A Field holds an Explanation and zero or more Examples,
      both of which may carry Complements
    - A Dictionary maps each unique headword to the group of Fields
      sharing it, through a sorted marisa trie index

Example:
    "■xxx : aaa◆bbb◆ccc■ddd◆eee■fff"
    → headword "xxx", explanation "aaa" with complements ["bbb", "ccc"],
      examples [("ddd", ["eee"]), ("fff", [])]
"""

from dataclasses import dataclass, field
from typing import Any, Iterator, Optional

from .fst import Map


@dataclass(frozen=True)
class Complement:
    """A parenthetical annotation on an explanation or an example."""

    body: str

    def sort_key(self) -> tuple:
        return (self.body,)

    def to_dict(self) -> dict[str, Any]:
        return {"body": self.body}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Complement":
        return cls(body=data["body"])


@dataclass(frozen=True)
class Example:
    """A usage sentence with its own complements."""

    sentence: str
    complements: tuple[Complement, ...] = ()

    def sort_key(self) -> tuple:
        return (self.sentence, tuple(c.sort_key() for c in self.complements))

    def to_dict(self) -> dict[str, Any]:
        return {
            "sentence": self.sentence,
            "complements": [c.body for c in self.complements],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Example":
        return cls(
            sentence=data["sentence"],
            complements=tuple(Complement(c) for c in data.get("complements", [])),
        )


@dataclass(frozen=True)
class Explanation:
    """The primary gloss of a Field."""

    body: str
    complements: tuple[Complement, ...] = ()

    def sort_key(self) -> tuple:
        return (self.body, tuple(c.sort_key() for c in self.complements))

    def to_dict(self) -> dict[str, Any]:
        return {
            "body": self.body,
            "complements": [c.body for c in self.complements],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Explanation":
        return cls(
            body=data["body"],
            complements=tuple(Complement(c) for c in data.get("complements", [])),
        )


@dataclass(frozen=True)
class Field:
    """One sense (part of speech or numbered usage) of a headword."""

    ident: Optional[str]            # e.g. "名", "1"; None when absent
    explanation: Explanation
    examples: tuple[Example, ...] = ()

    def sort_key(self) -> tuple:
        """Structural ordering: ident, then explanation, then examples.

        An absent ident sorts before any present one.
        """
        ident = (0, "") if self.ident is None else (1, self.ident)
        return (
            ident,
            self.explanation.sort_key(),
            tuple(e.sort_key() for e in self.examples),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "ident": self.ident,
            "explanation": self.explanation.to_dict(),
            "examples": [e.to_dict() for e in self.examples],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Field":
        """Create from dictionary."""
        return cls(
            ident=data.get("ident"),
            explanation=Explanation.from_dict(data["explanation"]),
            examples=tuple(Example.from_dict(e) for e in data.get("examples", [])),
        )


@dataclass(frozen=True)
class Dictionary:
    """The whole index: headword index plus parallel field groups.

    ``groups[index.get(headword)]`` holds every Field of that headword.
    Built once by the dictionary builder or restored from a snapshot;
    never mutated afterwards.
    """

    index: Map
    groups: tuple[tuple[Field, ...], ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.index)

    def __contains__(self, headword: str) -> bool:
        return headword in self.index

    def get(self, headword: str) -> Optional[tuple[Field, ...]]:
        """Get the field group of a headword, or None if absent."""
        group_id = self.index.get(headword)
        if group_id is None:
            return None
        return self.groups[group_id]

    def items(self) -> Iterator[tuple[str, tuple[Field, ...]]]:
        """Iterate (headword, field group) in sorted headword order."""
        for key, group_id in self.index.stream():
            yield key, self.groups[group_id]

    def headwords(self) -> list[str]:
        """Get sorted list of headwords."""
        return list(self.index.keys())

    def count_fields(self) -> int:
        """Get total number of fields across all groups."""
        return sum(len(group) for group in self.groups)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "headword_count": len(self),
            "field_count": self.count_fields(),
            "entries": {
                headword: [f.to_dict() for f in fields]
                for headword, fields in self.items()
            },
        }
