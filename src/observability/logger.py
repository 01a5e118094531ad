"""Observability logger utilities.

Provides:
- ``get_logger``: standard human-readable logger.
- ``JSONFormatter``: custom :class:`logging.Formatter` that emits JSON.
- ``configure_logging``: applies the ``observability`` settings section.
- ``log_trace``: emits a finished :class:`TraceContext` as one log record.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from src.core.settings import Settings
    from src.core.trace.trace_context import TraceContext

_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


# ── Human-readable logger ───────────────────────────────────────────


def get_logger(name: str = "code-splitter", log_level: Optional[str] = None) -> logging.Logger:
    """Get a configured logger.

    Args:
        name: Logger name.
        log_level: Optional log level string (e.g., "INFO").

    Returns:
        Configured logger instance.
    """

    if log_level:
        level = getattr(logging, log_level.upper(), logging.INFO)
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format=_TEXT_FORMAT,
        stream=sys.stderr,
    )

    # Streamlit's watcher is chatty at INFO
    logging.getLogger("watchdog").setLevel(logging.WARNING)

    return logging.getLogger(name)


# ── JSON Lines formatter ────────────────────────────────────────────


class JSONFormatter(logging.Formatter):
    """Logging formatter that outputs one JSON object per line.

    Each log record is serialised to a dict containing at least:
    ``timestamp``, ``level``, ``logger``, ``message``.  If the record
    carries an ``exc_info`` tuple the traceback is included as
    ``exception``.

    Extra attributes attached via *extra=* on the logger call are
    merged into the top-level dict (except internal Python fields).
    """

    _INTERNAL_ATTRS = frozenset({
        "args", "created", "exc_info", "exc_text", "filename",
        "funcName", "levelname", "levelno", "lineno", "module",
        "msecs", "message", "msg", "name", "pathname", "process",
        "processName", "relativeCreated", "stack_info", "thread",
        "threadName", "taskName",
    })

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        """Return the log record as a single-line JSON string."""
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key, val in record.__dict__.items():
            if key not in self._INTERNAL_ATTRS and key not in payload:
                try:
                    json.dumps(val)
                    payload[key] = val
                except (TypeError, ValueError):
                    payload[key] = str(val)

        if record.exc_info and record.exc_info[0] is not None:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False)


# ── Settings-driven setup ───────────────────────────────────────────


def configure_logging(settings: "Settings") -> logging.Logger:
    """Apply ``observability.log_level`` / ``log_format`` to the root logger.

    Repeated calls replace the formatter on existing root handlers rather
    than stacking new handlers.

    Returns:
        The application logger.
    """
    observability = settings.observability
    level_name = str(observability.get("log_level", "INFO"))
    logger = get_logger("code-splitter", level_name)

    root = logging.getLogger()
    root.setLevel(getattr(logging, level_name.upper(), logging.INFO))

    if str(observability.get("log_format", "text")).lower() == "json":
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(_TEXT_FORMAT)
    for handler in root.handlers:
        handler.setFormatter(formatter)

    return logger


def log_trace(logger: logging.Logger, trace: "TraceContext") -> None:
    """Log a finished trace at DEBUG level with the trace dict attached."""
    if trace.finished_at is None:
        trace.finish()
    data = trace.to_dict()
    logger.debug(
        "%s trace %s finished in %.2f ms",
        data["trace_type"],
        data["trace_id"],
        data["total_elapsed_ms"],
        extra={"trace": data},
    )
