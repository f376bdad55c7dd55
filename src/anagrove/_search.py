"""Backtracking multiset-combination search over a ranked candidate pool."""

from __future__ import annotations

import logging
import threading
import time
from bisect import bisect_left
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Protocol

from ._results import ResultAssembler
from ._types import PartialMode, SearchResult

if TYPE_CHECKING:
    from ._constraints import ConstraintSet
    from ._matcher import TokenMatcher
    from ._profile import LetterProfile
    from ._types import DictionaryEntry

logger = logging.getLogger(__name__)


class CancelFlag(Protocol):
    def is_set(self) -> bool: ...


class _Stop(Exception):
    """Unwinds the recursion on cancellation or when the result cap is hit."""


class _Walk:
    """One depth-first traversal: owns its assembler and node counter.

    Recursive frames pass ``remaining``, ``chosen`` and ``fit`` down by
    value; nothing is shared between sibling branches.
    """

    __slots__ = (
        "_search", "_out", "_cancel", "_stop", "nodes", "stopped",
    )

    def __init__(
        self,
        search: CombinationSearch,
        out: ResultAssembler,
        cancel: CancelFlag | None,
        stop: threading.Event,
    ) -> None:
        self._search = search
        self._out = out
        self._cancel = cancel
        self._stop = stop
        self.nodes = 0
        self.stopped = False

    def _words(self, chosen: tuple[int, ...]) -> list[str]:
        words = self._search._words
        return [words[i] for i in chosen]

    def run(
        self,
        seed: LetterProfile,
        fit: list[int],
        positions: Sequence[int],
    ) -> None:
        try:
            self._expand(seed, (), 0, fit, positions)
        except _Stop:
            self.stopped = True

    def _visit(
        self,
        remaining: LetterProfile,
        chosen: tuple[int, ...],
        covered: int,
        fit: list[int],
        start: int,
    ) -> None:
        self.nodes += 1
        search = self._search
        mode = search.partial_mode

        # Exact: the seed is exhausted, never extend further.
        if remaining.is_empty():
            if covered == search.full_mask:
                self._out.add_exact(self._words(chosen))
                if self._out.full:
                    raise _Stop
            return

        if mode is PartialMode.FRONTIER:
            self._out.add_partial(self._words(chosen))

        if len(chosen) >= search.max_words:
            if mode is PartialMode.DEAD_END:
                self._out.add_partial(self._words(chosen))
            return

        # A required token whose letters are gone can never be covered.
        matcher = search.matcher
        if matcher and not matcher.reachable(covered, remaining):
            return

        self._expand(
            remaining, chosen, covered, fit, range(bisect_left(fit, start), len(fit)),
        )

        if mode is PartialMode.DEAD_END and search.is_dead_end(fit, chosen):
            self._out.add_partial(self._words(chosen))

    def _expand(
        self,
        remaining: LetterProfile,
        chosen: tuple[int, ...],
        covered: int,
        fit: list[int],
        positions: Sequence[int],
    ) -> None:
        search = self._search
        profiles = search._profiles
        words = search._words
        masks = search._masks
        excluded = search.excluded
        cancel = self._cancel
        stop = self._stop
        full_fit = search.partial_mode is PartialMode.DEAD_END
        step = 0 if search.allow_repeats else 1

        for pos in positions:
            if stop.is_set() or (cancel is not None and cancel.is_set()):
                raise _Stop
            i = fit[pos]
            profile = profiles[i]
            if not remaining.contains(profile):
                continue
            if words[i] in excluded:
                continue
            child = remaining.subtract(profile)
            scan = fit if full_fit else fit[pos:]
            child_fit = [j for j in scan if child.contains(profiles[j])]
            self._visit(
                child, chosen + (i,), covered | masks[i], child_fit, i + step,
            )


class CombinationSearch:
    """Enumerates word multisets drawn from ``pool`` that fit a seed.

    ``pool`` is the rank-ordered candidate list; combinations are built in
    non-decreasing pool index order, so each unordered set is generated
    exactly once. With ``allow_repeats`` a word may be chosen more than
    once in the same combination.
    """

    __slots__ = (
        "_pool", "_profiles", "_words", "_masks", "matcher", "full_mask",
        "excluded", "max_words", "allow_repeats", "partial_mode",
    )

    def __init__(
        self,
        pool: Sequence[DictionaryEntry],
        constraints: ConstraintSet,
        matcher: TokenMatcher | None = None,
        *,
        allow_repeats: bool = False,
        partial_mode: PartialMode = PartialMode.DEAD_END,
    ) -> None:
        self._pool = tuple(pool)
        self._profiles = [e.profile for e in self._pool]
        self._words = [e.word for e in self._pool]
        self.matcher = matcher
        if matcher:
            self._masks = [matcher.mask(w) for w in self._words]
            self.full_mask = matcher.full_mask
        else:
            self._masks = [0] * len(self._pool)
            self.full_mask = 0
        self.excluded = constraints.excluded
        self.max_words = constraints.max_words
        self.allow_repeats = allow_repeats
        self.partial_mode = PartialMode(partial_mode)

    @property
    def pool(self) -> tuple[DictionaryEntry, ...]:
        return self._pool

    def fitting(self, seed: LetterProfile) -> list[int]:
        """Ascending pool indices of entries whose letters fit in ``seed``."""
        words = self._words
        excluded = self.excluded
        return [
            i for i, p in enumerate(self._profiles)
            if seed.contains(p) and words[i] not in excluded
        ]

    def is_dead_end(self, fit: list[int], chosen: tuple[int, ...]) -> bool:
        """No pool entry can be appended to ``chosen``.

        ``fit`` holds every pool entry that fits the remaining letters, not
        only those after the current start, so a dead end is maximal with
        respect to the whole pool.
        """
        if not chosen:
            return False
        if self.allow_repeats:
            return not fit
        return all(j in chosen for j in fit)

    def run(
        self,
        seed: LetterProfile,
        *,
        limit: int | None = None,
        cancel: CancelFlag | None = None,
        workers: int = 1,
    ) -> SearchResult:
        """Search the pool against ``seed`` and return the assembled result.

        ``cancel`` is polled once per candidate; when it is set the search
        unwinds and returns what it has, marked incomplete. ``workers`` > 1
        splits the first-word choices across a thread pool.
        """
        t0 = time.perf_counter()
        out = ResultAssembler(self.matcher, limit)

        if seed.is_empty():
            return out.result(complete=True)

        fit = self.fitting(seed)

        if self.partial_mode is PartialMode.WORDS:
            for i in fit:
                out.add_partial([self._words[i]])

        stop = threading.Event()
        positions = range(len(fit))
        if workers <= 1 or len(fit) < 2:
            walk = _Walk(self, out, cancel, stop)
            walk.run(seed, fit, positions)
            walks = [walk]
        else:
            walks = self._run_parallel(seed, fit, out, cancel, stop, limit, workers)

        nodes = 1 + sum(w.nodes for w in walks)
        stopped = any(w.stopped for w in walks)
        logger.debug(
            "Searched %d candidates (%d fit) in %d nodes, %.1f ms%s",
            len(self._pool), len(fit), nodes,
            (time.perf_counter() - t0) * 1000.0,
            " (stopped early)" if stopped else "",
        )
        return out.result(complete=not stopped, candidates=len(fit), nodes=nodes)

    def _run_parallel(
        self,
        seed: LetterProfile,
        fit: list[int],
        out: ResultAssembler,
        cancel: CancelFlag | None,
        stop: threading.Event,
        limit: int | None,
        workers: int,
    ) -> list[_Walk]:
        """First-word choices are dealt round-robin to ``workers`` walks.

        Each partition is independent because combinations are built in
        non-decreasing index order from their first word.
        """
        workers = min(workers, len(fit))
        walks = [
            _Walk(self, ResultAssembler(self.matcher, limit), cancel, stop)
            for _ in range(workers)
        ]

        def _work(k: int) -> None:
            walk = walks[k]
            walk.run(seed, fit, range(k, len(fit), workers))
            if walk.stopped:
                stop.set()

        with ThreadPoolExecutor(max_workers=workers) as pool:
            for future in [pool.submit(_work, k) for k in range(workers)]:
                future.result()

        for walk in walks:
            out.merge(walk._out)
        return walks
