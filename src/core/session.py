"""Immutable session state for the interactive splitter.

Every user action maps to a function that takes the current
:class:`SessionState` and returns a new one.  Derived data (records,
archive) is dropped whenever the input text or the delimiter changes.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Optional, Tuple

from src.core.errors import (
    InvalidDelimiterError,
    NoHeadersFoundError,
    PackagingError,
    SplitterError,
)
from src.core.settings import DEFAULT_DELIMITER
from src.core.trace.trace_context import TraceContext
from src.core.types import FileRecord
from src.libs.splitter.splitter_factory import SplitterFactory
from src.observability.logger import get_logger, log_trace

if TYPE_CHECKING:
    from src.core.settings import Settings
    from src.libs.packager.zip_packager import ZipPackager

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class SessionState:
    """Snapshot of one user's splitter session.

    Attributes:
        input_text: Text typed or uploaded by the user.
        delimiter: Current delimiter (kept across resets).
        delimiter_error: Inline validation message, empty when valid.
        files: Records produced by the last successful split.
        is_processed: Whether ``files`` reflects the current input.
        archive: ZIP bytes once packaged, else None.
        notice: Dismissible message for the last failed action.
    """

    input_text: str = ""
    delimiter: str = DEFAULT_DELIMITER
    delimiter_error: str = ""
    files: Tuple[FileRecord, ...] = ()
    is_processed: bool = False
    archive: Optional[bytes] = None
    notice: Optional[str] = None

    @property
    def can_process(self) -> bool:
        return bool(self.input_text.strip())

    @property
    def is_archive_ready(self) -> bool:
        return self.archive is not None


def initial_state(delimiter: str = DEFAULT_DELIMITER) -> SessionState:
    return SessionState(delimiter=delimiter)


def _without_derived(state: SessionState, **changes: object) -> SessionState:
    return replace(
        state,
        files=(),
        is_processed=False,
        archive=None,
        notice=None,
        **changes,
    )


def set_input(state: SessionState, text: str) -> SessionState:
    """Replace the input text and discard derived records."""
    return _without_derived(state, input_text=text)


def load_upload(state: SessionState, data: bytes) -> SessionState:
    """Use an uploaded file as input; undecodable bytes are replaced."""
    return set_input(state, data.decode("utf-8", errors="replace"))


def validate_delimiter(delimiter: str) -> str:
    """Return the inline error message for *delimiter*, or ``""``."""
    if not delimiter.strip():
        return str(InvalidDelimiterError())
    return ""


def set_delimiter(state: SessionState, delimiter: str) -> SessionState:
    """Change the delimiter, validating it and discarding derived records."""
    return _without_derived(
        state,
        delimiter=delimiter,
        delimiter_error=validate_delimiter(delimiter),
    )


def process(state: SessionState, settings: Settings) -> SessionState:
    """Split the current input with the current delimiter.

    Blank input leaves the state untouched.  Validation failures and
    "no headers" are reported on the returned state; the input is kept.
    """
    if not state.can_process:
        return state

    delimiter_error = validate_delimiter(state.delimiter)
    if delimiter_error:
        return replace(state, delimiter_error=delimiter_error)

    trace = TraceContext(trace_type="split")
    try:
        splitter = SplitterFactory.create(settings, delimiter=state.delimiter)
        records = splitter.split_text(state.input_text, trace=trace)
        if not records:
            raise NoHeadersFoundError(state.delimiter)
    except NoHeadersFoundError as exc:
        logger.info("No headers found for delimiter %r", state.delimiter)
        return replace(state, files=(), is_processed=False, archive=None, notice=str(exc))
    except SplitterError as exc:
        logger.warning("Split rejected: %s", exc)
        return replace(state, notice=f"Error processing code: {exc}")
    finally:
        trace.metadata["delimiter"] = state.delimiter
        log_trace(logger, trace)

    logger.info("Split input into %d files", len(records))
    return replace(
        state,
        delimiter_error="",
        files=tuple(records),
        is_processed=True,
        archive=None,
        notice=None,
    )


def package(state: SessionState, packager: ZipPackager) -> SessionState:
    """Build the archive for the current records.

    On failure the records stay in place so the user can retry.
    """
    trace = TraceContext(trace_type="package")
    try:
        archive = packager.package(state.files, trace=trace)
    except PackagingError as exc:
        logger.error("Packaging failed: %s", exc)
        return replace(state, archive=None, notice=f"Failed to create archive: {exc}")
    finally:
        log_trace(logger, trace)
    return replace(state, archive=archive, notice=None)


def dismiss_notice(state: SessionState) -> SessionState:
    return replace(state, notice=None)


def reset(state: SessionState) -> SessionState:
    """Start over; only the delimiter survives."""
    return initial_state(state.delimiter)
