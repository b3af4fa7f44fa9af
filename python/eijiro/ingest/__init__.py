"""Corpus ingestion module.

Turns raw Eijiro-style text into (headword, Field) entries:
- grammar: the nested field/example/complement patterns
- corpus: line splitting, line-number annotation, file reading

Usage:
    from eijiro.ingest import iter_entries, read_corpus

    text = read_corpus("EIJIRO.txt")
    for entry in iter_entries(text):
        print(entry.headword, entry.field.ident)
"""

from .corpus import ParsedEntry, iter_entries, read_corpus, split_lines
from .grammar import (
    COMPLEMENT_MARKER,
    ENTRY_MARKER,
    FieldGrammar,
    default_grammar,
    parse_field,
)

__all__ = [
    "COMPLEMENT_MARKER",
    "ENTRY_MARKER",
    "FieldGrammar",
    "ParsedEntry",
    "default_grammar",
    "iter_entries",
    "parse_field",
    "read_corpus",
    "split_lines",
]
