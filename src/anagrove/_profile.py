"""Letter profiles: fixed-alphabet count vectors."""

from __future__ import annotations

from ._errors import InvalidOperation

ALPHABET = "abcdefghijklmnopqrstuvwxyz"
ALPHA_SIZE = len(ALPHABET)

_ORD_A = ord("a")
_ZERO = (0,) * ALPHA_SIZE


class LetterProfile:
    """Per-letter occurrence counts over a-z. Immutable.

    Case is folded and every character outside a-z is ignored. Equality
    and hashing are defined over the full count vector, so two texts have
    equal profiles exactly when they are anagrams of each other.
    """

    __slots__ = ("_counts", "_nonzero", "_mask", "_total", "_hash")

    def __init__(self, counts: tuple[int, ...] = _ZERO) -> None:
        if len(counts) != ALPHA_SIZE:
            raise InvalidOperation(
                f"profile needs {ALPHA_SIZE} counts, got {len(counts)}"
            )
        nonzero: list[tuple[int, int]] = []
        mask = 0
        total = 0
        for i, c in enumerate(counts):
            if c < 0:
                raise InvalidOperation(
                    f"negative count {c} for {ALPHABET[i]!r}"
                )
            if c:
                nonzero.append((i, c))
                mask |= 1 << i
                total += c
        self._counts = tuple(counts)
        self._nonzero = tuple(nonzero)
        self._mask = mask
        self._total = total
        self._hash = hash(self._counts)

    @classmethod
    def from_text(cls, text: str) -> LetterProfile:
        counts = [0] * ALPHA_SIZE
        for ch in text.lower():
            i = ord(ch) - _ORD_A
            if 0 <= i < ALPHA_SIZE:
                counts[i] += 1
        return cls(tuple(counts))

    # -- Queries --

    @property
    def counts(self) -> tuple[int, ...]:
        return self._counts

    @property
    def mask(self) -> int:
        """26-bit presence mask: bit i set when letter i occurs."""
        return self._mask

    def total(self) -> int:
        return self._total

    def is_empty(self) -> bool:
        return self._total == 0

    def letters(self) -> str:
        """Sorted letters, e.g. ``"eilnst"`` for "listen"."""
        return "".join(ALPHABET[i] * c for i, c in self._nonzero)

    def contains(self, other: LetterProfile) -> bool:
        """True iff every count in ``other`` fits within this profile."""
        if other._mask & ~self._mask:
            return False
        counts = self._counts
        for i, c in other._nonzero:
            if counts[i] < c:
                return False
        return True

    # -- Arithmetic --

    def subtract(self, other: LetterProfile) -> LetterProfile:
        if not self.contains(other):
            raise InvalidOperation(
                f"cannot subtract {other.letters()!r} from {self.letters()!r}"
            )
        counts = list(self._counts)
        for i, c in other._nonzero:
            counts[i] -= c
        return LetterProfile(tuple(counts))

    def add(self, other: LetterProfile) -> LetterProfile:
        counts = list(self._counts)
        for i, c in other._nonzero:
            counts[i] += c
        return LetterProfile(tuple(counts))

    __sub__ = subtract
    __add__ = add

    # -- Dunder --

    def __len__(self) -> int:
        return self._total

    def __bool__(self) -> bool:
        return self._total != 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LetterProfile):
            return NotImplemented
        return self._counts == other._counts

    def __hash__(self) -> int:
        return self._hash

    def __repr__(self) -> str:
        return f"LetterProfile({self.letters()!r})"

