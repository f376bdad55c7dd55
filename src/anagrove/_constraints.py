"""Query constraint validation and normalization."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from ._errors import InvalidInput
from ._types import PartialMode

MAX_WORDS_CEILING = 12

DEFAULT_MIN_WORD_LENGTH = 3
DEFAULT_MAX_WORDS = 3
DEFAULT_TOP_N = 200_000

_TOKEN_SPLIT_RE = re.compile(r"[,;\s]+")
_LETTERS_RE = re.compile(r"[a-z]+")


def parse_tokens(value: str | Iterable[str] | None) -> tuple[str, ...]:
    """Split a comma/whitespace delimited string (or iterable of strings)
    into case-folded, de-duplicated tokens in first-seen order."""
    if value is None:
        return ()
    if isinstance(value, str):
        raw = _TOKEN_SPLIT_RE.split(value)
    else:
        raw = []
        for item in value:
            raw.extend(_TOKEN_SPLIT_RE.split(item))
    seen: dict[str, None] = {}
    for token in raw:
        token = token.strip().lower()
        if token:
            seen.setdefault(token, None)
    return tuple(seen)


def _check_int(field: str, value: object, lo: int, hi: int | None = None) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInput(field, f"must be an integer, got {value!r}")
    if value < lo:
        raise InvalidInput(field, f"must be >= {lo}, got {value}")
    if hi is not None and value > hi:
        raise InvalidInput(field, f"must be <= {hi}, got {value}")
    return value


def check_limit(limit: object) -> int | None:
    """None (no cap) or a positive number of exact combinations."""
    if limit is None:
        return None
    return _check_int("limit", limit, 1)


def check_workers(workers: object) -> int:
    return _check_int("workers", workers, 1)


def parse_partial_mode(value: PartialMode | str) -> PartialMode:
    try:
        return PartialMode(value)
    except ValueError:
        choices = ", ".join(m.value for m in PartialMode)
        raise InvalidInput(
            "partial_mode", f"must be one of {choices}, got {value!r}"
        ) from None


@dataclass(slots=True, frozen=True)
class ConstraintSet:
    min_word_length: int
    max_words: int
    excluded: frozenset[str]
    required: tuple[str, ...]
    top_n: int

    @classmethod
    def build(
        cls,
        min_word_length: int = DEFAULT_MIN_WORD_LENGTH,
        max_words: int = DEFAULT_MAX_WORDS,
        excludes: str | Iterable[str] | None = "",
        includes: str | Iterable[str] | None = "",
        top_n: int = DEFAULT_TOP_N,
    ) -> ConstraintSet:
        """Validate caller parameters and return a normalized ConstraintSet.

        Raises:
            InvalidInput: naming the first offending field.
        """
        min_word_length = _check_int("min_word_length", min_word_length, 1)
        max_words = _check_int("max_words", max_words, 1, MAX_WORDS_CEILING)
        top_n = _check_int("top_n", top_n, 1)

        excluded = parse_tokens(excludes)
        required = parse_tokens(includes)

        for token in required:
            if not _LETTERS_RE.fullmatch(token):
                raise InvalidInput(
                    "includes", f"token {token!r} contains non-letters"
                )
        both = sorted(set(excluded) & set(required))
        if both:
            raise InvalidInput(
                "includes",
                f"token(s) both required and excluded: {', '.join(both)}",
            )

        return cls(
            min_word_length=min_word_length,
            max_words=max_words,
            excluded=frozenset(excluded),
            required=required,
            top_n=top_n,
        )

    def allows(self, word: str) -> bool:
        """Per-word filter: length and exclusion. Required tokens are
        checked per combination, not here."""
        return len(word) >= self.min_word_length and word not in self.excluded
