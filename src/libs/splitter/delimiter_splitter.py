"""Delimiter-based splitter for concatenated file dumps.

Input looks like::

    ### src/app.py
    print("hello")
    ### README.md
    # Title

Every occurrence of the delimiter followed by whitespace and a path token
starts a new file; its content runs up to the next such header or the end
of the text.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Iterator, NamedTuple

from src.core.errors import EmptyInputError, InvalidDelimiterError
from src.core.settings import DEFAULT_DELIMITER
from src.core.types import FileRecord
from src.libs.splitter.base_splitter import BaseSplitter

if TYPE_CHECKING:
    from src.core.settings import Settings
    from src.core.trace.trace_context import TraceContext


# ASCII only: Python's \w would also accept non-ASCII letters.
PATH_TOKEN = r"[A-Za-z0-9_/.\-]+"


class HeaderMatch(NamedTuple):
    """A delimiter occurrence followed by a valid path token."""

    start: int
    end: int
    path: str


def build_header_pattern(delimiter: str) -> re.Pattern[str]:
    """Compile the header regex for *delimiter*, matched literally."""
    if not delimiter or not delimiter.strip():
        raise InvalidDelimiterError()
    return re.compile(rf"{re.escape(delimiter)}\s+({PATH_TOKEN})\s*", re.MULTILINE)


def iter_header_matches(text: str, delimiter: str) -> Iterator[HeaderMatch]:
    """Yield every header match in *text*, in order of appearance."""
    for match in build_header_pattern(delimiter).finditer(text):
        yield HeaderMatch(match.start(), match.end(), match.group(1))


def split(text: str, delimiter: str) -> list[FileRecord]:
    """Split *text* into file records at each ``<delimiter> <path>`` header.

    Args:
        text: Concatenated file contents with header lines.
        delimiter: Literal marker preceding each path.

    Returns:
        Records in header order; empty when no header matches.

    Raises:
        EmptyInputError: If *text* is blank.
        InvalidDelimiterError: If *delimiter* is blank.

    Example:
        >>> split("### a.txt\\nhello\\n### b/c.txt\\nworld", "###")
        [FileRecord(path='a.txt', content='hello'), FileRecord(path='b/c.txt', content='world')]
    """
    if not text or not text.strip():
        raise EmptyInputError()
    if not delimiter or not delimiter.strip():
        raise InvalidDelimiterError()

    headers = list(iter_header_matches(text, delimiter))
    records: list[FileRecord] = []
    for index, header in enumerate(headers):
        end = headers[index + 1].start if index + 1 < len(headers) else len(text)
        records.append(FileRecord(path=header.path, content=text[header.end:end].strip()))
    return records


class DelimiterSplitter(BaseSplitter):
    """Splitter bound to one literal delimiter."""

    def __init__(self, delimiter: str = DEFAULT_DELIMITER) -> None:
        if not delimiter or not delimiter.strip():
            raise InvalidDelimiterError()
        self.delimiter = delimiter

    @classmethod
    def from_settings(cls, settings: Settings, delimiter: str | None = None) -> "DelimiterSplitter":
        """Build from ``splitter.delimiter``; an explicit *delimiter* wins."""
        return cls(settings.delimiter if delimiter is None else delimiter)

    def split_text(self, text: str, trace: TraceContext | None = None) -> list[FileRecord]:
        if trace is None:
            return split(text, self.delimiter)

        with trace.stage_timer("split") as stage:
            stage["delimiter"] = self.delimiter
            stage["input_chars"] = len(text)
            records = split(text, self.delimiter)
            stage["record_count"] = len(records)
        return records

    def __repr__(self) -> str:
        return f"DelimiterSplitter(delimiter={self.delimiter!r})"
