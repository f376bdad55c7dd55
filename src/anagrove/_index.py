"""Immutable, frequency-ranked dictionary index."""

from __future__ import annotations

import logging
import re
from collections import defaultdict
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from ._profile import LetterProfile
from ._types import DictionaryEntry

if TYPE_CHECKING:
    from ._constraints import ConstraintSet

logger = logging.getLogger(__name__)

_WORD_RE = re.compile(r"[a-z]+")


def normalize_word(word: str) -> str | None:
    """Case-fold and strip a word; None if it is empty or has non-letters."""
    token = word.strip().lower()
    if not _WORD_RE.fullmatch(token):
        return None
    return token


class DictionaryIndex:
    """All dictionary entries sorted by (rank, word), built once.

    Read-only after construction, so a single instance can be shared by
    concurrent queries without locking.
    """

    __slots__ = ("_entries", "_by_word", "_buckets")

    def __init__(self, entries: Iterable[DictionaryEntry]) -> None:
        self._entries: tuple[DictionaryEntry, ...] = tuple(
            sorted(entries, key=lambda e: (e.rank, e.word))
        )
        self._by_word: dict[str, DictionaryEntry] = {
            e.word: e for e in self._entries
        }
        if len(self._by_word) != len(self._entries):
            raise ValueError("duplicate words in dictionary entries")

        buckets: dict[str, list[DictionaryEntry]] = defaultdict(list)
        for e in self._entries:
            buckets[e.profile.letters()].append(e)
        self._buckets: dict[str, tuple[DictionaryEntry, ...]] = {
            sig: tuple(group) for sig, group in buckets.items()
        }

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, int]]) -> DictionaryIndex:
        """Build from raw (word, rank) pairs.

        Words are case-folded; words with characters outside a-z are
        dropped. A word seen more than once keeps its lowest rank.
        """
        best: dict[str, int] = {}
        rejected = 0
        for word, rank in pairs:
            token = normalize_word(word)
            if token is None:
                rejected += 1
                continue
            prev = best.get(token)
            if prev is None or rank < prev:
                best[token] = rank

        if rejected:
            logger.debug("Rejected %d non-alphabetic dictionary words", rejected)

        index = cls(
            DictionaryEntry(word=w, rank=r, profile=LetterProfile.from_text(w))
            for w, r in best.items()
        )
        logger.debug(
            "Indexed %d words in %d letter signatures",
            len(index), len(index._buckets),
        )
        return index

    # -- Views --

    @property
    def entries(self) -> tuple[DictionaryEntry, ...]:
        return self._entries

    def top_n(self, n: int) -> tuple[DictionaryEntry, ...]:
        """The ``min(n, len(self))`` most common entries, rank ascending."""
        return self._entries[:max(0, n)]

    def filtered(
        self,
        constraints: ConstraintSet,
        seed: LetterProfile | None = None,
    ) -> list[DictionaryEntry]:
        """Rank-ordered candidate pool for a query.

        Applies the frequency cutoff, minimum length and exclusions. When
        ``seed`` is given, entries that cannot fit in it are dropped as
        well. Required tokens are a combination-level constraint and are
        not applied here.
        """
        pool: list[DictionaryEntry] = []
        for e in self.top_n(constraints.top_n):
            if not constraints.allows(e.word):
                continue
            if seed is not None and not seed.contains(e.profile):
                continue
            pool.append(e)
        return pool

    # -- Lookup --

    def lookup(self, word: str) -> DictionaryEntry | None:
        token = normalize_word(word)
        if token is None:
            return None
        return self._by_word.get(token)

    def anagrams_of(self, text: str) -> tuple[DictionaryEntry, ...]:
        """Entries whose letters are exactly those of ``text``."""
        return self._buckets.get(LetterProfile.from_text(text).letters(), ())

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[DictionaryEntry]:
        return iter(self._entries)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.lookup(word) is not None
