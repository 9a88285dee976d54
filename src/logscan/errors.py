"""Exception hierarchy for logscan.

Configuration errors surface synchronously while a scanner is being set up.
Decode errors surface during ``scan()`` and abort it unless the scanner was
built with ``skip_invalid=True``.
"""
from __future__ import annotations


class LogScanError(Exception):
    """Base class for every error raised by logscan."""


# ── Configuration ───────────────────────────────────────────────────────────


class ConfigurationError(LogScanError, ValueError):
    """Invalid scanner setup."""


class MissingFilename(ConfigurationError):
    def __init__(self) -> None:
        super().__init__("filename required in options")


class InvalidFilterType(ConfigurationError, TypeError):
    def __init__(self, obj: object) -> None:
        super().__init__(f"filters must be callable, got {type(obj).__name__}")


class InvalidMapperType(ConfigurationError, TypeError):
    def __init__(self, obj: object) -> None:
        super().__init__(f"mappers must be callable, got {type(obj).__name__}")


class InvalidFieldSpecification(ConfigurationError, TypeError):
    def __init__(self, spec: object) -> None:
        self.spec = spec
        super().__init__(f"Unknown field type: {spec!r}")


class MissingBound(ConfigurationError):
    def __init__(self) -> None:
        super().__init__("timestamp filter needs either from or until")


# ── Scan time ───────────────────────────────────────────────────────────────


class DecodeError(LogScanError, ValueError):
    """A source line could not be turned into a record."""

    def __init__(self, message: str, line_number: int | None = None, line: str | None = None) -> None:
        self.line_number = line_number
        self.line = line
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class TimestampDecodeError(DecodeError):
    """A record's timestamp could not be parsed by the timestamp filter."""


class ScanStateError(LogScanError, RuntimeError):
    """``scan()`` was called on a scanner that already ran."""
