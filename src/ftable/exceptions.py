"""Exceptions for ftable."""

from typing import Any

# ---------------------------------------------------------------------------
# Base Exception
# ---------------------------------------------------------------------------


class FTableError(Exception):
    """
    Base exception for all ftable errors.

    All exceptions raised by this library inherit from this class,
    allowing callers to catch all library-specific errors with a single
    except clause.
    """

    pass


# ---------------------------------------------------------------------------
# Category Exceptions
# ---------------------------------------------------------------------------


class ConfigurationError(FTableError):
    """
    Base exception for configuration errors.

    Raised before any input is read or any output is produced, for
    invalid alignment settings such as a multi-byte pad character or an
    unrecognized alignment flag name.
    """

    pass


_OPERATION_PHRASES = {"read": "reading from", "write": "writing to"}


class InputOutputError(FTableError):
    """
    Raised when reading the input stream or writing the output stream fails.

    Attributes:
        operation: Either "read" or "write"
        stream: Name of the stream involved (e.g. "stdin")
    """

    def __init__(self, operation: str, stream: str, cause: OSError) -> None:
        self.operation = operation
        self.stream = stream
        self.cause = cause
        super().__init__(f"error {_OPERATION_PHRASES[operation]} {stream}: {cause}")


# ---------------------------------------------------------------------------
# Configuration Exceptions
# ---------------------------------------------------------------------------


class ValidationError(ConfigurationError):
    """
    Raised when an option value fails validation.

    Attributes:
        field: Name of the option that failed validation
        value: The invalid value
        reason: Human-readable explanation
    """

    def __init__(self, field: str, value: Any, reason: str) -> None:
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field} {value!r}: {reason}")


class UnknownFlagError(ConfigurationError):
    """
    Raised when an alignment flag name is not recognized.

    Attributes:
        name: The unrecognized flag name
        known: Sorted tuple of the recognized flag names
    """

    def __init__(self, name: str, known: tuple[str, ...]) -> None:
        self.name = name
        self.known = known
        super().__init__(f"unrecognized flag {name!r} (expected one of: {', '.join(known)})")


__all__ = [
    "ConfigurationError",
    "FTableError",
    "InputOutputError",
    "UnknownFlagError",
    "ValidationError",
]
