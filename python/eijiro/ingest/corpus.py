"""Corpus ingestion: whole text buffer to parsed entries.

One entry per line. Lines are split on "\\n" with a trailing "\\r"
removed, so files with either line ending parse the same. A final
newline does not produce an extra line; any other empty line is
malformed.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

from ..errors import MalformedEntry
from ..schema import Field
from .grammar import FieldGrammar, default_grammar


@dataclass(frozen=True)
class ParsedEntry:
    """One parsed corpus line."""

    headword: str
    field: Field
    origin_order: int       # 0-based line index in the corpus


def split_lines(text: str) -> list[str]:
    """Split corpus text into lines."""
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def iter_entries(
    text: str,
    grammar: Optional[FieldGrammar] = None,
) -> Iterator[ParsedEntry]:
    """Parse every line of a corpus.

    Args:
        text: Full corpus text.
        grammar: Grammar to parse with (default: ■/◆ markers).

    Yields:
        ParsedEntry per line, in corpus order.

    Raises:
        MalformedEntry: For the first line that fails to parse, annotated
            with its 1-based line number.
    """
    grammar = grammar or default_grammar()
    for index, line in enumerate(split_lines(text)):
        try:
            headword, field = grammar.parse_field(line)
        except MalformedEntry as e:
            raise e.at_line(index + 1) from None
        yield ParsedEntry(headword, field, index)


def read_corpus(filepath: Path | str, encoding: str = "utf-8") -> str:
    """Read a corpus file into memory.

    Args:
        filepath: Path to the corpus text file.
        encoding: Text encoding (Eijiro releases are often "cp932").

    Returns:
        Full corpus text.
    """
    with open(filepath, "r", encoding=encoding, newline="") as f:
        return f.read()
