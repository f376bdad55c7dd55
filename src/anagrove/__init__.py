"""Anagrove: multiset anagram generator over a frequency-ranked dictionary."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ._constraints import MAX_WORDS_CEILING, ConstraintSet, parse_tokens
from ._errors import (
    AnagroveChecksumError,
    AnagroveError,
    AnagroveVersionError,
    InvalidInput,
    InvalidOperation,
)
from ._index import DictionaryIndex
from ._profile import LetterProfile
from ._types import DictionaryEntry, PartialMode, SearchResult

if TYPE_CHECKING:
    from pathlib import Path

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "load",
    "AnagramEngine",
    "AnagroveChecksumError",
    "AnagroveError",
    "AnagroveVersionError",
    "ConstraintSet",
    "DictionaryEntry",
    "DictionaryIndex",
    "InvalidInput",
    "InvalidOperation",
    "LetterProfile",
    "MAX_WORDS_CEILING",
    "PartialMode",
    "SearchResult",
    "parse_tokens",
]


def load(data_dir: Path | str | None = None) -> "AnagramEngine":
    """Load the dictionary and return a ready-to-use AnagramEngine.

    Args:
        data_dir: Path to data directory. If None, uses bundled package data.
    """
    from ._engine import AnagramEngine
    from ._loader import load_data

    data = load_data(data_dir)
    return AnagramEngine(DictionaryIndex.from_pairs(data["pairs"]))


# Deferred import so AnagramEngine is available as anagrove.AnagramEngine
# without circular import issues at module load time.
def __getattr__(name: str):
    if name == "AnagramEngine":
        from ._engine import AnagramEngine
        return AnagramEngine
    raise AttributeError(f"module 'anagrove' has no attribute {name!r}")
