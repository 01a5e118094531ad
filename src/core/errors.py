"""Error types raised while splitting text and packaging archives."""

from __future__ import annotations


class SplitterError(ValueError):
    """Base class for rejected splitter input."""


class EmptyInputError(SplitterError):
    """Raised when the text to split is blank."""

    def __init__(self, message: str = "Input text cannot be empty") -> None:
        super().__init__(message)


class InvalidDelimiterError(SplitterError):
    """Raised when the delimiter is empty or whitespace-only."""

    def __init__(self, message: str = "Delimiter cannot be empty") -> None:
        super().__init__(message)


class NoHeadersFoundError(SplitterError):
    """Raised when a caller requires records but no header matched."""

    def __init__(self, delimiter: str) -> None:
        self.delimiter = delimiter
        super().__init__(
            f'No valid file headers found. Please check your delimiter "{delimiter}" '
            "and ensure it's followed by a valid file path."
        )


class PackagingError(RuntimeError):
    """Raised when the archive cannot be built."""
