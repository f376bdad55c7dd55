"""Anagrove error types."""


class AnagroveError(Exception):
    """Base error for all anagrove failures."""


class AnagroveVersionError(AnagroveError):
    """Manifest version mismatch."""


class AnagroveChecksumError(AnagroveError):
    """File checksum verification failed."""


class InvalidInput(AnagroveError, ValueError):
    """Malformed or contradictory query constraints.

    Raised before any search work begins. ``field`` names the offending
    parameter.
    """

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field


class InvalidOperation(AnagroveError):
    """Internal invariant violation, e.g. subtracting a profile that does
    not fit."""
