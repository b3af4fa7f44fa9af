"""Field grammar for Eijiro-style dictionary lines.

Format:
    ■<headword>[ {<ident>}] : <explanation>[◆<complement>]*[■<example>[◆<complement>]*]*

The grammar is marker-delimited, not escaped: a body runs until the next
entry marker (■) or complement marker (◆), whichever comes first.

Three nested patterns do the work:
    - field: headword, optional ident, explanation body, then the raw
      complement run and the raw example run
    - example: one sentence plus its own raw complement run
    - complement: one complement body

Usage:
    from eijiro.ingest.grammar import parse_field

    headword, field = parse_field("■xxx : aaa◆bbb■ddd")
"""

import re
from functools import lru_cache
from typing import Optional

from ..errors import MalformedEntry
from ..schema import Complement, Example, Explanation, Field

ENTRY_MARKER = "■"
COMPLEMENT_MARKER = "◆"


class FieldGrammar:
    """Compiled patterns for one pair of entry/complement markers."""

    def __init__(
        self,
        entry_marker: str = ENTRY_MARKER,
        complement_marker: str = COMPLEMENT_MARKER,
    ):
        """Initialize grammar.

        Args:
            entry_marker: Character that opens a field and each example.
            complement_marker: Character that opens each complement.
        """
        if len(entry_marker) != 1 or len(complement_marker) != 1:
            raise ValueError("Markers must be single characters")
        if entry_marker == complement_marker:
            raise ValueError("Entry and complement markers must differ")

        self.entry_marker = entry_marker
        self.complement_marker = complement_marker

        e = re.escape(entry_marker)
        c = re.escape(complement_marker)
        body = f"[^{c}{e}]"

        self.field_pattern = re.compile(
            rf"{e}(?P<item>.+?)(?: +\{{(?P<ident>.+)\}})? : "
            rf"(?P<exp>{body}*)(?P<complements>(?:{c}{body}+)*)(?P<examples>(?:{e}.+)*)"
        )
        self.example_pattern = re.compile(
            rf"{e}(?P<sentence>{body}+)(?P<complements>(?:{c}{body}+)+)?"
        )
        self.complement_pattern = re.compile(rf"{c}(?P<body>{body}+)")

    def __repr__(self) -> str:
        return f"FieldGrammar({self.entry_marker!r}, {self.complement_marker!r})"

    def parse_complements(self, text: str) -> tuple[Complement, ...]:
        """Extract every complement body from a raw complement run."""
        return tuple(
            Complement(m.group("body"))
            for m in self.complement_pattern.finditer(text)
        )

    def parse_examples(self, text: str) -> tuple[Example, ...]:
        """Extract every example, with its complements, from a raw example run."""
        examples = []
        for m in self.example_pattern.finditer(text):
            complements = m.group("complements")
            examples.append(Example(
                sentence=m.group("sentence"),
                complements=self.parse_complements(complements) if complements else (),
            ))
        return tuple(examples)

    def parse_field(self, line: str) -> tuple[str, Field]:
        """Parse one line into (headword, Field).

        Raises:
            MalformedEntry: If the line does not match the field pattern.
        """
        m = self.field_pattern.search(line)
        if m is None:
            raise MalformedEntry(line)

        return m.group("item"), Field(
            ident=m.group("ident"),
            explanation=Explanation(
                body=m.group("exp"),
                complements=self.parse_complements(m.group("complements")),
            ),
            examples=self.parse_examples(m.group("examples")),
        )


@lru_cache(maxsize=1)
def default_grammar() -> FieldGrammar:
    """Get the process-wide grammar for the standard ■/◆ markers."""
    return FieldGrammar()


def parse_field(line: str, grammar: Optional[FieldGrammar] = None) -> tuple[str, Field]:
    """Parse one line with the given grammar (default: ■/◆ markers)."""
    return (grammar or default_grammar()).parse_field(line)
