"""Exception hierarchy for eijiro.

Every failure in the parsing, building, snapshot and lookup layers is
raised as a subclass of EijiroError so callers can decide between
aborting, retrying with corrected input, or falling back (for example
re-parsing the corpus when a snapshot is corrupt).
"""

from typing import Optional


class EijiroError(Exception):
    """Base class for all eijiro errors."""


class MalformedEntry(EijiroError):
    """A corpus line does not match the field grammar."""

    def __init__(self, text: str, line: Optional[int] = None):
        self.text = text
        self.line = line
        if line is None:
            message = f"Invalid field format: {text!r}"
        else:
            message = f"line {line}: Invalid field format: {text!r}"
        super().__init__(message)

    def at_line(self, line: int) -> "MalformedEntry":
        """Return a copy annotated with a 1-based line number."""
        return MalformedEntry(self.text, line=line)


class DuplicateInsertionError(EijiroError):
    """A key was inserted twice into a headword index builder."""

    def __init__(self, previous: str, key: str, line: Optional[int] = None):
        self.previous = previous
        self.key = key
        self.line = line
        message = self._describe()
        if line is not None:
            message = f"[line {line}]: {message}"
        super().__init__(message)

    def at_line(self, line: int) -> "DuplicateInsertionError":
        """Return a copy of the same type annotated with a line number."""
        return type(self)(self.previous, self.key, line=line)

    def _describe(self) -> str:
        return f"Duplicate key inserted: {self.key!r}"


class OutOfOrderError(DuplicateInsertionError):
    """A key was inserted that sorts before the previously inserted key."""

    def _describe(self) -> str:
        return (
            f"Keys inserted out of order: {self.key!r} "
            f"after {self.previous!r}"
        )


class CorruptSnapshot(EijiroError):
    """A snapshot or headword index blob failed structural validation."""


class InvalidQuery(EijiroError):
    """A lookup query could not be compiled into an automaton."""
