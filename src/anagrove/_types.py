"""Data structures for anagrove."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ._profile import LetterProfile


@dataclass(slots=True, frozen=True)
class DictionaryEntry:
    word: str                # normalized, a-z only
    rank: int                # lower = more common
    profile: LetterProfile   # precomputed letter counts

    def __len__(self) -> int:
        return len(self.word)


class PartialMode(enum.Enum):
    """Which non-exact combinations are reported as partials."""

    DEAD_END = "dead_end"   # maximal: nothing else from the pool fits
    FRONTIER = "frontier"   # every non-empty, non-exact state visited
    WORDS = "words"         # single pool words that fit in the seed
    NONE = "none"


@dataclass(slots=True, frozen=True)
class SearchResult:
    anagrams: list[str]
    partials: list[str]
    complete: bool = True    # False when cancelled or cut off by a limit
    candidates: int = 0      # pool entries that fit in the seed
    nodes: int = 0           # search states visited

    def __iter__(self):
        # Allows ``anagrams, partials = engine.generate(...)``.
        yield self.anagrams
        yield self.partials
