"""Factory for creating splitter strategy instances from settings."""

from __future__ import annotations

from typing import Any, Protocol

from src.core.settings import Settings
from src.libs.splitter.base_splitter import BaseSplitter
from src.libs.splitter.delimiter_splitter import DelimiterSplitter


class SplitterCreator(Protocol):
    def __call__(self, settings: Settings, **overrides: Any) -> BaseSplitter: ...


class SplitterFactory:
    """Factory that resolves splitter implementations by configured type."""

    _registry: dict[str, SplitterCreator] = {
        "delimiter": lambda settings, **overrides: DelimiterSplitter.from_settings(
            settings, overrides.get("delimiter")
        ),
    }

    @classmethod
    def register(cls, splitter_type: str, creator: SplitterCreator) -> None:
        """Register a splitter constructor.

        Args:
            splitter_type: Splitter type key (e.g. "delimiter").
            creator: Callable that builds a splitter instance.
        """

        normalized = splitter_type.strip().lower()
        if not normalized:
            raise ValueError("Splitter type cannot be empty")
        cls._registry[normalized] = creator

    @classmethod
    def create(cls, settings: Settings, **overrides: Any) -> BaseSplitter:
        """Create a splitter instance based on settings.

        Args:
            settings: Global application settings.
            **overrides: Per-call options forwarded to the creator
                (e.g. ``delimiter="[[FILE]]"``).

        Returns:
            A configured splitter implementation.

        Raises:
            ValueError: If splitter type is missing or not registered.
        """

        splitter_type_raw = settings.splitter.get("type")
        if not isinstance(splitter_type_raw, str) or not splitter_type_raw.strip():
            raise ValueError("Missing required splitter type: splitter.type")

        splitter_type = splitter_type_raw.strip().lower()
        creator = cls._registry.get(splitter_type)
        if creator is None:
            available = ", ".join(sorted(cls._registry)) or "<none>"
            raise ValueError(
                "Unsupported splitter.type: "
                f"{splitter_type}. Registered splitters: {available}"
            )

        return creator(settings, **overrides)

    @classmethod
    def list_types(cls) -> list[str]:
        """List all registered splitter types."""
        return sorted(cls._registry)
