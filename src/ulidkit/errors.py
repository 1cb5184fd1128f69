"""Error taxonomy for ULID construction, decoding, and monotonic generation."""

from __future__ import annotations


class UlidError(ValueError):
    """Base class for every error raised by ulidkit's core."""


class InvalidLengthError(UlidError):
    """Raised when an input string or destination buffer has the wrong length."""

    def __init__(self, message: str, *, expected: int, actual: int) -> None:
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class InvalidCharError(UlidError):
    """Raised when a character is not a (canonicalizable) Crockford base32 symbol."""

    def __init__(self, char: str, index: int | None = None) -> None:
        if index is None:
            message = f"invalid ULID character {char!r}"
        else:
            message = f"invalid ULID character {char!r} at index {index}"
        super().__init__(message)
        self.char = char
        self.index = index


class InvalidTimestampError(UlidError):
    """Raised when a timestamp falls outside the 48-bit range."""


class InvalidRandomError(UlidError):
    """Raised when a randomness value falls outside the 80-bit range."""


class MonotonicOverflowError(UlidError):
    """Raised when the 80-bit randomness space is exhausted within one millisecond."""


__all__ = [
    "InvalidCharError",
    "InvalidLengthError",
    "InvalidRandomError",
    "InvalidTimestampError",
    "MonotonicOverflowError",
    "UlidError",
]
