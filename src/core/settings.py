"""Settings loading and validation utilities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml


REPO_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_SETTINGS_PATH = "config/settings.yaml"

DEFAULT_DELIMITER = "###"
DEFAULT_ARCHIVE_NAME = "split_files.zip"
DEFAULT_PREVIEW_CHARS = 100


def resolve_path(relative: str | Path) -> Path:
    """Resolve a repository-relative path to an absolute one.

    Absolute paths are returned unchanged.
    """
    path = Path(relative)
    if path.is_absolute():
        return path
    return REPO_ROOT / path


@dataclass(slots=True)
class Settings:
    """Application settings structure.

    Attributes:
        splitter: Splitter configuration dictionary (type, delimiter).
        archive: Archive configuration dictionary (filename, compression).
        ui: UI configuration dictionary (preview length, upload types).
        observability: Logging configuration dictionary.
        raw: Original full settings dictionary.
    """

    splitter: dict[str, Any]
    archive: dict[str, Any]
    ui: dict[str, Any]
    observability: dict[str, Any]
    raw: dict[str, Any]

    @property
    def delimiter(self) -> str:
        value = self.splitter.get("delimiter")
        if isinstance(value, str) and value.strip():
            return value
        return DEFAULT_DELIMITER

    @property
    def archive_name(self) -> str:
        return str(self.archive.get("filename") or DEFAULT_ARCHIVE_NAME)

    @property
    def preview_chars(self) -> int:
        value = self.ui.get("preview_chars", DEFAULT_PREVIEW_CHARS)
        try:
            return int(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"ui.preview_chars must be a positive integer, got {value!r}") from exc


def _require_path(data: dict[str, Any], dotted_path: str) -> None:
    current: Any = data
    for key in dotted_path.split("."):
        if not isinstance(current, dict) or key not in current:
            raise ValueError(f"Missing required settings field: {dotted_path}")
        current = current[key]


def validate_settings(settings: Settings) -> None:
    """Validate required settings fields.

    Args:
        settings: Parsed settings object.

    Raises:
        ValueError: If any required field is missing or malformed.
    """

    required_paths = [
        "splitter",
        "splitter.type",
        "archive",
        "observability",
    ]

    for path in required_paths:
        _require_path(settings.raw, path)

    for section in ("splitter", "archive", "ui", "observability"):
        if not isinstance(getattr(settings, section), dict):
            raise ValueError(f"Settings section '{section}' must be a mapping")

    compression = settings.archive.get("compression", "deflated")
    if compression not in ("deflated", "stored"):
        raise ValueError(
            f"Unsupported archive.compression: {compression}. Expected 'deflated' or 'stored'"
        )

    if settings.preview_chars <= 0:
        raise ValueError("ui.preview_chars must be a positive integer")


def settings_from_dict(parsed: dict[str, Any]) -> Settings:
    """Build a validated ``Settings`` object from an already parsed mapping."""
    settings = Settings(
        splitter=parsed.get("splitter") or {},
        archive=parsed.get("archive") or {},
        ui=parsed.get("ui") or {},
        observability=parsed.get("observability") or {},
        raw=parsed,
    )
    validate_settings(settings)
    return settings


def load_settings(path: str | Path = DEFAULT_SETTINGS_PATH) -> Settings:
    """Load YAML settings from a file and validate required fields.

    Relative paths are resolved against the repository root, so the
    result does not depend on the current working directory.

    Args:
        path: Path to the YAML settings file.

    Returns:
        Parsed and validated settings object.

    Raises:
        FileNotFoundError: If the path does not exist.
        ValueError: If YAML is invalid or required fields are missing.
    """

    settings_path = resolve_path(path)
    if not settings_path.exists():
        raise FileNotFoundError(f"Settings file not found: {settings_path}")

    with settings_path.open("r", encoding="utf-8") as fp:
        try:
            parsed = yaml.safe_load(fp)
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in settings file {settings_path}: {exc}") from exc

    if not isinstance(parsed, dict):
        raise ValueError("Settings file must contain a YAML mapping at top level")

    return settings_from_dict(parsed)
