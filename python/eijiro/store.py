"""Loading a Dictionary from disk, preferring a cached snapshot.

Policy:
    1. If the snapshot exists and loads, use it.
    2. Otherwise parse the corpus, build, and write a fresh snapshot.

A corrupt snapshot is logged and replaced; a missing or malformed corpus
is an error for the caller.
"""

import logging
import time
from pathlib import Path
from typing import Optional

from .builder import BuildStats, build
from .errors import CorruptSnapshot
from .ingest import FieldGrammar, iter_entries, read_corpus
from .schema import Dictionary
from .snapshot import load_file, save_file

logger = logging.getLogger(__name__)


def build_from_corpus(
    corpus_path: Path | str,
    encoding: str = "utf-8",
    entry_order: str = "structural",
    grammar: Optional[FieldGrammar] = None,
) -> Dictionary:
    """Parse a corpus file and build a Dictionary."""
    logger.info("Parsing corpus %s", corpus_path)
    start = time.time()
    text = read_corpus(corpus_path, encoding=encoding)
    dictionary = build(iter_entries(text, grammar), entry_order=entry_order)

    stats = BuildStats.collect(dictionary)
    logger.info(
        "Built dictionary: %d headwords, %d fields, %d index bytes in %.1fs",
        stats.unique_headwords,
        stats.total_entries,
        stats.index_bytes,
        time.time() - start,
    )
    return dictionary


def load_or_build(
    corpus_path: Path | str,
    snapshot_path: Path | str,
    encoding: str = "utf-8",
    entry_order: str = "structural",
    rebuild: bool = False,
) -> Dictionary:
    """Load the snapshot if usable, otherwise build from the corpus.

    Args:
        corpus_path: Path to the corpus text file.
        snapshot_path: Path to the snapshot file (read and written).
        encoding: Corpus text encoding.
        entry_order: Ordering of fields inside a group when building.
        rebuild: Ignore any existing snapshot.

    Returns:
        The loaded or freshly built Dictionary.
    """
    snapshot_path = Path(snapshot_path)

    if not rebuild and snapshot_path.exists():
        logger.info("Loading dict")
        try:
            dictionary = load_file(snapshot_path)
        except CorruptSnapshot as e:
            logger.warning(
                "Snapshot %s is corrupt (%s); re-parsing corpus", snapshot_path, e
            )
        else:
            logger.info("Loaded dict: %d headwords", len(dictionary))
            return dictionary

    dictionary = build_from_corpus(corpus_path, encoding=encoding, entry_order=entry_order)
    try:
        size = save_file(dictionary, snapshot_path)
    except OSError as e:
        logger.warning("Could not write snapshot %s: %s", snapshot_path, e)
    else:
        logger.info("Wrote snapshot %s (%.1f MB)", snapshot_path, size / (1024 * 1024))
    return dictionary
