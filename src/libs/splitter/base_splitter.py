"""Base abstraction for text splitter strategies."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.core.trace.trace_context import TraceContext
    from src.core.types import FileRecord


class BaseSplitter(ABC):
    """Abstract interface for splitter implementations."""

    @abstractmethod
    def split_text(self, text: str, trace: TraceContext | None = None) -> list[FileRecord]:
        """Split a concatenated text dump into file records.

        Args:
            text: Source text to split.
            trace: Optional trace context object.

        Returns:
            List of file records in source order.
        """
