"""Dictionary builder module.

Sorts and groups parsed entries, then builds the headword index.
"""

from .dictionary import (
    ENTRY_ORDERS,
    INPUT,
    STRUCTURAL,
    BuildStats,
    DictionaryBuilder,
    build,
)

__all__ = [
    "ENTRY_ORDERS",
    "INPUT",
    "STRUCTURAL",
    "BuildStats",
    "DictionaryBuilder",
    "build",
]
