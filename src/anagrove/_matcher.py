"""Required-token matching (Aho-Corasick) for the include constraint."""

from __future__ import annotations

from collections.abc import Iterable

import ahocorasick

from ._profile import LetterProfile


class TokenMatcher:
    """Tracks which required tokens occur as substrings of chosen words.

    Each token gets one bit; ``mask(word)`` is the set of tokens found in
    ``word``. A combination satisfies the include constraint when the OR
    of its word masks equals ``full_mask``.
    """

    __slots__ = ("_tokens", "_ac", "_profiles", "_full_mask")

    def __init__(self, tokens: Iterable[str] = ()) -> None:
        self._tokens = tuple(tokens)
        self._profiles = tuple(LetterProfile.from_text(t) for t in self._tokens)
        self._full_mask = (1 << len(self._tokens)) - 1

        if self._tokens:
            ac = ahocorasick.Automaton()
            for bit, token in enumerate(self._tokens):
                ac.add_word(token, bit)
            ac.make_automaton()
            self._ac = ac
        else:
            self._ac = None

    @property
    def tokens(self) -> tuple[str, ...]:
        return self._tokens

    @property
    def full_mask(self) -> int:
        return self._full_mask

    def __bool__(self) -> bool:
        return bool(self._tokens)

    def mask(self, word: str) -> int:
        """Bitmask of required tokens occurring in ``word``."""
        if self._ac is None:
            return 0
        m = 0
        for _, bit in self._ac.iter(word):
            m |= 1 << bit
        return m

    def covers(self, words: Iterable[str]) -> bool:
        """True when every required token occurs in at least one word."""
        if self._ac is None:
            return True
        m = 0
        for word in words:
            m |= self.mask(word)
        return m == self._full_mask

    def reachable(self, covered: int, remaining: LetterProfile) -> bool:
        """True when every token not yet in ``covered`` still fits in the
        remaining letters."""
        for bit, profile in enumerate(self._profiles):
            if not covered >> bit & 1 and not remaining.contains(profile):
                return False
        return True
