"""Command-line entry point: ``anagrove SEED [options]``."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from . import __version__, load
from ._constraints import (
    DEFAULT_MAX_WORDS,
    DEFAULT_MIN_WORD_LENGTH,
    DEFAULT_TOP_N,
    MAX_WORDS_CEILING,
)
from ._errors import AnagroveError, InvalidInput
from ._types import PartialMode

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="anagrove",
        description="Find combinations of dictionary words spelled by a seed phrase.",
    )
    p.add_argument("seed", help="phrase whose letters are rearranged")
    p.add_argument("--min-length", type=int, default=DEFAULT_MIN_WORD_LENGTH,
                   help="shortest word allowed (default: %(default)s)")
    p.add_argument("--max-words", type=int, default=DEFAULT_MAX_WORDS,
                   help=f"most words per combination, 1-{MAX_WORDS_CEILING} "
                        "(default: %(default)s)")
    p.add_argument("--exclude", default="",
                   help="comma separated words that may not appear")
    p.add_argument("--include", default="",
                   help="comma separated tokens every result must contain")
    p.add_argument("--top-n", type=int, default=DEFAULT_TOP_N,
                   help="use only the N most common words (default: %(default)s)")
    p.add_argument("--partials", choices=[m.value for m in PartialMode],
                   default=PartialMode.NONE.value,
                   help="also print partial combinations (default: %(default)s)")
    p.add_argument("--limit", type=int, default=None,
                   help="stop after N exact combinations")
    p.add_argument("--repeats", action="store_true",
                   help="allow a word to appear more than once")
    p.add_argument("--workers", type=int, default=1,
                   help="threads to split the search across")
    p.add_argument("--data-dir", default=None,
                   help="dictionary data directory (default: bundled data)")
    p.add_argument("--json", action="store_true", help="print JSON output")
    p.add_argument("-v", "--verbose", action="count", default=0)
    p.add_argument("--version", action="version",
                   version=f"%(prog)s {__version__}")
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose > 1
        else logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        engine = load(args.data_dir)
    except AnagroveError as e:
        print(f"anagrove: {e}", file=sys.stderr)
        return 1

    try:
        result = engine.generate(
            args.seed,
            min_word_length=args.min_length,
            max_words=args.max_words,
            excludes=args.exclude,
            includes=args.include,
            top_n=args.top_n,
            allow_repeats=args.repeats,
            partial_mode=args.partials,
            limit=args.limit,
            workers=args.workers,
        )
    except InvalidInput as e:
        print(f"anagrove: invalid {e}", file=sys.stderr)
        return 2

    logger.info(
        "%d anagrams, %d partials from %d candidate words",
        len(result.anagrams), len(result.partials), result.candidates,
    )

    if args.json:
        json.dump({
            "anagrams": result.anagrams,
            "partials": result.partials,
            "complete": result.complete,
        }, sys.stdout, indent=2)
        sys.stdout.write("\n")
        return 0

    for line in result.anagrams:
        print(line)
    if result.partials:
        print()
        for line in result.partials:
            print(line)
    if not result.complete:
        logger.warning("Search stopped early; results are incomplete")
    return 0
