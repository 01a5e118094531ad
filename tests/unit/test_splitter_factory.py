"""Unit tests for SplitterFactory type routing."""

from __future__ import annotations

from typing import Any

import pytest

from src.core.settings import Settings
from src.core.types import FileRecord
from src.libs.splitter.base_splitter import BaseSplitter
from src.libs.splitter.delimiter_splitter import DelimiterSplitter
from src.libs.splitter.splitter_factory import SplitterFactory


class _UpperSplitter(BaseSplitter):
    def split_text(self, text: str, trace: object | None = None) -> list[FileRecord]:
        return [FileRecord(path="upper.txt", content=text.upper())]


def _make_settings(splitter_type: str, delimiter: str | None = None) -> Settings:
    splitter: dict[str, Any] = {"type": splitter_type}
    if delimiter is not None:
        splitter["delimiter"] = delimiter
    raw = {
        "splitter": splitter,
        "archive": {"filename": "split_files.zip"},
        "ui": {},
        "observability": {"log_level": "INFO"},
    }
    return Settings(
        splitter=raw["splitter"],
        archive=raw["archive"],
        ui=raw["ui"],
        observability=raw["observability"],
        raw=raw,
    )


def test_default_registry_creates_delimiter_splitter() -> None:
    splitter = SplitterFactory.create(_make_settings("delimiter", "@@"))

    assert isinstance(splitter, DelimiterSplitter)
    assert splitter.delimiter == "@@"


def test_type_is_case_and_whitespace_insensitive() -> None:
    splitter = SplitterFactory.create(_make_settings("  Delimiter "))
    assert isinstance(splitter, DelimiterSplitter)


def test_missing_delimiter_falls_back_to_default() -> None:
    splitter = SplitterFactory.create(_make_settings("delimiter"))
    assert splitter.delimiter == "###"


def test_delimiter_override_wins_over_settings() -> None:
    splitter = SplitterFactory.create(_make_settings("delimiter", "@@"), delimiter="[[FILE]]")

    assert splitter.split_text("[[FILE]] x.txt\ndata") == [FileRecord("x.txt", "data")]


def test_create_routes_to_registered_splitter_types(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        SplitterFactory,
        "_registry",
        {
            "delimiter": lambda settings, **overrides: DelimiterSplitter("###"),
            "upper": lambda settings, **overrides: _UpperSplitter(),
        },
    )

    upper = SplitterFactory.create(_make_settings("upper"))

    assert upper.split_text("x") == [FileRecord("upper.txt", "X")]
    assert SplitterFactory.list_types() == ["delimiter", "upper"]


def test_register_adds_creator(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(SplitterFactory, "_registry", {})

    SplitterFactory.register(" Upper ", lambda settings, **overrides: _UpperSplitter())

    assert SplitterFactory.list_types() == ["upper"]


def test_register_with_empty_type_raises() -> None:
    with pytest.raises(ValueError, match="cannot be empty"):
        SplitterFactory.register("   ", lambda settings, **overrides: _UpperSplitter())


def test_create_with_missing_splitter_type_raises_value_error() -> None:
    with pytest.raises(ValueError, match=r"splitter\.type"):
        SplitterFactory.create(_make_settings(""))


def test_create_with_unknown_splitter_type_raises_value_error() -> None:
    with pytest.raises(ValueError, match=r"Unsupported splitter\.type"):
        SplitterFactory.create(_make_settings("unknown"))
