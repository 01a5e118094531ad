"""Tests for settings loading and validation."""

from __future__ import annotations

from pathlib import Path

import pytest

from src.core.settings import (
    REPO_ROOT,
    Settings,
    load_settings,
    resolve_path,
    settings_from_dict,
    validate_settings,
)


_MINIMAL_VALID_SETTINGS = """
splitter:
  type: delimiter
  delimiter: "[[FILE]]"
archive:
  filename: bundle.zip
  compression: stored
ui:
  preview_chars: 40
observability:
  log_level: DEBUG
"""


def _write_yaml(path: Path, content: str) -> Path:
    path.write_text(content, encoding="utf-8")
    return path


def test_load_settings_valid_yaml_returns_settings(tmp_path: Path) -> None:
    config_path = _write_yaml(tmp_path / "settings.yaml", _MINIMAL_VALID_SETTINGS)

    settings = load_settings(str(config_path))

    assert isinstance(settings, Settings)
    assert settings.delimiter == "[[FILE]]"
    assert settings.archive_name == "bundle.zip"
    assert settings.preview_chars == 40
    assert settings.archive["compression"] == "stored"


def test_repository_settings_file_is_valid() -> None:
    settings = load_settings()

    assert settings.splitter["type"] == "delimiter"
    assert settings.delimiter == "###"
    assert settings.archive_name == "split_files.zip"
    assert settings.preview_chars == 100


def test_defaults_when_optional_fields_missing() -> None:
    settings = settings_from_dict(
        {"splitter": {"type": "delimiter"}, "archive": {}, "observability": {}}
    )

    assert settings.delimiter == "###"
    assert settings.archive_name == "split_files.zip"
    assert settings.preview_chars == 100
    assert settings.ui == {}


def test_blank_configured_delimiter_falls_back_to_default() -> None:
    settings = settings_from_dict(
        {"splitter": {"type": "delimiter", "delimiter": "  "}, "archive": {}, "observability": {}}
    )
    assert settings.delimiter == "###"


def test_load_settings_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_settings(str(tmp_path / "missing.yaml"))


def test_load_settings_missing_required_field_raises_readable_error(tmp_path: Path) -> None:
    invalid_yaml = _MINIMAL_VALID_SETTINGS.replace("  type: delimiter\n", "", 1)
    config_path = _write_yaml(tmp_path / "settings.yaml", invalid_yaml)

    with pytest.raises(ValueError, match=r"splitter\.type"):
        load_settings(str(config_path))


def test_load_settings_non_mapping_raises(tmp_path: Path) -> None:
    config_path = _write_yaml(tmp_path / "settings.yaml", "- just\n- a list\n")

    with pytest.raises(ValueError, match="YAML mapping"):
        load_settings(str(config_path))


def test_load_settings_invalid_yaml_raises_value_error(tmp_path: Path) -> None:
    config_path = _write_yaml(tmp_path / "settings.yaml", "splitter: [unclosed\n")

    with pytest.raises(ValueError, match="Invalid YAML"):
        load_settings(str(config_path))


def test_validate_settings_rejects_unknown_compression() -> None:
    raw = {
        "splitter": {"type": "delimiter"},
        "archive": {"compression": "bzip2"},
        "ui": {},
        "observability": {},
    }
    settings = Settings(
        splitter=raw["splitter"],
        archive=raw["archive"],
        ui=raw["ui"],
        observability=raw["observability"],
        raw=raw,
    )

    with pytest.raises(ValueError, match=r"archive\.compression"):
        validate_settings(settings)


def test_validate_settings_rejects_non_positive_preview() -> None:
    with pytest.raises(ValueError, match=r"ui\.preview_chars"):
        settings_from_dict(
            {
                "splitter": {"type": "delimiter"},
                "archive": {},
                "ui": {"preview_chars": 0},
                "observability": {},
            }
        )


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"archive": "x"}, "'archive' must be a mapping"),
        ({"observability": ["INFO"]}, "'observability' must be a mapping"),
        ({"ui": "compact"}, "'ui' must be a mapping"),
        ({"ui": {"preview_chars": [10]}}, r"ui\.preview_chars"),
        ({"ui": {"preview_chars": "many"}}, r"ui\.preview_chars"),
    ],
)
def test_malformed_sections_raise_value_error(overrides: dict, message: str) -> None:
    raw = {"splitter": {"type": "delimiter"}, "archive": {}, "observability": {}}
    raw.update(overrides)

    with pytest.raises(ValueError, match=message):
        settings_from_dict(raw)


def test_load_settings_scalar_section_raises_value_error(tmp_path: Path) -> None:
    config_path = _write_yaml(
        tmp_path / "settings.yaml",
        "splitter:\n  type: delimiter\narchive: x\nobservability: {}\n",
    )

    with pytest.raises(ValueError, match="'archive' must be a mapping"):
        load_settings(str(config_path))


def test_resolve_path_relative_and_absolute(tmp_path: Path) -> None:
    assert resolve_path("config/settings.yaml") == REPO_ROOT / "config" / "settings.yaml"
    assert resolve_path(tmp_path) == tmp_path
