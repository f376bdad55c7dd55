"""Collects, deduplicates and formats search results."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from ._types import SearchResult

if TYPE_CHECKING:
    from ._matcher import TokenMatcher

SEPARATOR = " "


def combination_key(words: Iterable[str]) -> tuple[str, ...]:
    """Multiset identity of a combination, independent of assembly order."""
    return tuple(sorted(words))


def format_combination(key: tuple[str, ...]) -> str:
    return SEPARATOR.join(key)


class ResultAssembler:
    """Accumulates exact and partial combinations for one query.

    Combinations are keyed by their sorted word tuple, so the same
    multiset is kept once per collection no matter how it was reached.
    Discovery order is preserved. ``limit`` caps the number of exact
    combinations; once reached, ``full`` turns true and the search stops.
    """

    __slots__ = ("_matcher", "_limit", "_exact", "_partial")

    def __init__(
        self, matcher: TokenMatcher | None = None, limit: int | None = None,
    ) -> None:
        if limit is not None and limit < 1:
            raise ValueError(f"limit must be >= 1, got {limit}")
        self._matcher = matcher
        self._limit = limit
        self._exact: dict[tuple[str, ...], None] = {}
        self._partial: dict[tuple[str, ...], None] = {}

    @property
    def full(self) -> bool:
        return self._limit is not None and len(self._exact) >= self._limit

    def _accepts(self, key: tuple[str, ...]) -> bool:
        if not key:
            return False
        return self._matcher is None or self._matcher.covers(key)

    def add_exact(self, words: Iterable[str]) -> bool:
        """Record an exact combination; False if rejected or a duplicate."""
        key = combination_key(words)
        if self.full or key in self._exact or not self._accepts(key):
            return False
        self._exact[key] = None
        return True

    def add_partial(self, words: Iterable[str]) -> bool:
        key = combination_key(words)
        if key in self._partial or not self._accepts(key):
            return False
        self._partial[key] = None
        return True

    def merge(self, other: ResultAssembler) -> None:
        for key in other._exact:
            self.add_exact(key)
        for key in other._partial:
            self.add_partial(key)

    @property
    def n_exact(self) -> int:
        return len(self._exact)

    @property
    def n_partial(self) -> int:
        return len(self._partial)

    def result(
        self, complete: bool = True, *, candidates: int = 0, nodes: int = 0,
    ) -> SearchResult:
        return SearchResult(
            anagrams=[format_combination(k) for k in self._exact],
            partials=[format_combination(k) for k in self._partial],
            complete=complete,
            candidates=candidates,
            nodes=nodes,
        )
