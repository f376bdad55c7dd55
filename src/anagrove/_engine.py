"""AnagramEngine: query facade over a loaded dictionary index."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from ._constraints import (
    DEFAULT_MAX_WORDS,
    DEFAULT_MIN_WORD_LENGTH,
    DEFAULT_TOP_N,
    ConstraintSet,
    check_limit,
    check_workers,
    parse_partial_mode,
)
from ._matcher import TokenMatcher
from ._profile import LetterProfile
from ._search import CombinationSearch
from ._types import PartialMode, SearchResult

if TYPE_CHECKING:
    from ._index import DictionaryIndex
    from ._search import CancelFlag
    from ._types import DictionaryEntry

logger = logging.getLogger(__name__)


class AnagramEngine:
    """Main query engine. Holds the dictionary index and exposes the public API.

    The index is never mutated, so one engine may serve concurrent
    queries from several threads.
    """

    __slots__ = ("_index",)

    def __init__(self, index: DictionaryIndex) -> None:
        self._index = index

    @property
    def dictionary(self) -> DictionaryIndex:
        return self._index

    # -- Query API --

    def generate(
        self,
        seed: str,
        min_word_length: int = DEFAULT_MIN_WORD_LENGTH,
        max_words: int = DEFAULT_MAX_WORDS,
        excludes: str | Iterable[str] = "",
        includes: str | Iterable[str] = "",
        top_n: int = DEFAULT_TOP_N,
        *,
        allow_repeats: bool = False,
        partial_mode: PartialMode | str = PartialMode.DEAD_END,
        limit: int | None = None,
        cancel: CancelFlag | None = None,
        workers: int = 1,
    ) -> SearchResult:
        """Find word combinations that can be spelled from ``seed``.

        Args:
            seed: Input phrase. Case and non-letters are ignored.
            min_word_length: Shortest word allowed in a combination.
            max_words: Most words allowed in one combination (1-12).
            excludes: Words that may not appear (comma separated or iterable).
            includes: Tokens that must each occur as a substring of some
                word in every returned combination.
            top_n: Only the ``top_n`` most common dictionary words are used.
            allow_repeats: Let the same word appear more than once.
            partial_mode: Which leftover combinations to report as partials.
            limit: Stop after this many exact combinations.
            cancel: Object with ``is_set()``; polled during the search.
            workers: Threads to split the first-word choices across.

        Returns:
            SearchResult with ``anagrams`` (all letters used) and
            ``partials`` (letters left over).

        Raises:
            InvalidInput: If a constraint is malformed or contradictory.
        """
        constraints = ConstraintSet.build(
            min_word_length=min_word_length,
            max_words=max_words,
            excludes=excludes,
            includes=includes,
            top_n=top_n,
        )
        return self.search(
            seed, constraints,
            allow_repeats=allow_repeats,
            partial_mode=partial_mode,
            limit=limit,
            cancel=cancel,
            workers=workers,
        )

    def search(
        self,
        seed: str,
        constraints: ConstraintSet,
        *,
        allow_repeats: bool = False,
        partial_mode: PartialMode | str = PartialMode.DEAD_END,
        limit: int | None = None,
        cancel: CancelFlag | None = None,
        workers: int = 1,
    ) -> SearchResult:
        """Run a query with an already validated ConstraintSet.

        The search options are checked here, before any candidate work.
        """
        mode = parse_partial_mode(partial_mode)
        limit = check_limit(limit)
        workers = check_workers(workers)

        profile = LetterProfile.from_text(seed)
        pool = self._index.filtered(constraints, profile)
        logger.debug(
            "Query %r: %d letters, %d candidate words",
            seed, profile.total(), len(pool),
        )
        search = CombinationSearch(
            pool,
            constraints,
            TokenMatcher(constraints.required),
            allow_repeats=allow_repeats,
            partial_mode=mode,
        )
        return search.run(profile, limit=limit, cancel=cancel, workers=workers)

    def candidates(
        self, seed: str, constraints: ConstraintSet | None = None,
    ) -> list[str]:
        """Rank-ordered dictionary words whose letters fit in ``seed``."""
        if constraints is None:
            constraints = ConstraintSet.build()
        profile = LetterProfile.from_text(seed)
        if profile.is_empty():
            return []
        return [e.word for e in self._index.filtered(constraints, profile)]

    # -- Lookup API --

    def lookup_word(self, word: str) -> DictionaryEntry | None:
        """Look up a single word with the same normalization as the index."""
        return self._index.lookup(word)

    def anagrams_of(self, word: str) -> list[str]:
        """Single dictionary words using exactly the letters of ``word``."""
        return [e.word for e in self._index.anagrams_of(word)]
