"""eijiro CLI - English-Japanese dictionary lookup.

Usage:
    python -m eijiro.main awkward
    python -m eijiro.main colour --distance 1 --corpus EIJIRO.txt
    python -m eijiro.main selfie --json
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from . import config as cfg
from .builder import ENTRY_ORDERS
from .errors import EijiroError
from .lookup import search
from .schema import Field
from .store import load_or_build

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def format_field(headword: str, field: Field) -> str:
    """Render one field the way the terminal output shows it."""
    complements = "".join(f"◆{c.body}" for c in field.explanation.complements)
    examples = "".join(f"\n        {e.sentence}" for e in field.examples)
    return (
        f"{headword} {{{field.ident or ''}}} : "
        f"{field.explanation.body}{complements}{examples}"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="eijiro",
        description="eijiro - English-Japanese dictionary (using Eijiro)",
    )
    parser.add_argument("word", help="Headword to look up")
    parser.add_argument(
        "--distance",
        "-d",
        type=int,
        default=cfg.default_max_edits(),
        help="Maximum edit distance (default: %(default)s)",
    )
    parser.add_argument(
        "--corpus",
        type=Path,
        default=Path(cfg.default_corpus()),
        help="Corpus text file (default: %(default)s)",
    )
    parser.add_argument(
        "--snapshot",
        type=Path,
        default=Path(cfg.default_snapshot()),
        help="Binary snapshot cache (default: %(default)s)",
    )
    parser.add_argument(
        "--encoding",
        default=cfg.default_encoding(),
        help="Corpus encoding (default: %(default)s)",
    )
    parser.add_argument(
        "--entry-order",
        choices=ENTRY_ORDERS,
        default=cfg.default_entry_order(),
        help="Ordering of senses within a headword (default: %(default)s)",
    )
    parser.add_argument(
        "--rebuild",
        action="store_true",
        help="Re-parse the corpus even if a snapshot exists",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print matches as JSON",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--verbose", "-v", action="store_true", help="Log progress")
    verbosity.add_argument("--quiet", "-q", action="store_true", help="Only log errors")
    return parser


def _log_level(args: argparse.Namespace) -> int:
    if args.verbose:
        return logging.INFO
    if args.quiet:
        return logging.ERROR
    return getattr(logging, str(cfg.default_log_level()).upper(), logging.WARNING)


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=_log_level(args), format=LOG_FORMAT)

    if args.rebuild or not args.snapshot.exists():
        if not args.corpus.exists():
            logger.error("Corpus file not found: %s", args.corpus)
            return 2

    try:
        dictionary = load_or_build(
            args.corpus,
            args.snapshot,
            encoding=args.encoding,
            entry_order=args.entry_order,
            rebuild=args.rebuild,
        )
        matches = list(search(
            dictionary,
            args.word,
            args.distance,
            state_limit=cfg.default_state_limit(),
        ))
    except (EijiroError, OSError, UnicodeDecodeError) as e:
        logger.error("%s", e)
        return 2

    if args.json:
        print(json.dumps(
            [
                {"headword": m.headword, "fields": [f.to_dict() for f in m.fields]}
                for m in matches
            ],
            indent=2,
            ensure_ascii=False,
        ))
    else:
        hit_idx = 0
        for m in matches:
            for field in m.fields:
                print(f"[{hit_idx:3}] {format_field(m.headword, field)}")
                hit_idx += 1

    return 0 if matches else 1


if __name__ == "__main__":
    sys.exit(main())
