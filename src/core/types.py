"""Shared value types."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FileRecord:
    """One file extracted from a concatenated text dump.

    Attributes:
        path: Path token captured after the delimiter (``a/b/c.txt``).
        content: Stripped text between this header and the next one.
    """

    path: str
    content: str

    def preview(self, limit: int = 100) -> str:
        """Return at most *limit* characters, with ``...`` when truncated."""
        if len(self.content) > limit:
            return self.content[:limit] + "..."
        return self.content
