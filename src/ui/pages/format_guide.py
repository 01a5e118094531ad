"""Format Guide page – input format reference and active configuration."""

from __future__ import annotations

import streamlit as st

from src.core.settings import load_settings
from src.libs.splitter.delimiter_splitter import PATH_TOKEN, split


def example_dump(delimiter: str) -> str:
    """Sample input for *delimiter*."""
    return (
        f"{delimiter} src/app.py\n"
        "print('hello')\n"
        "\n"
        f"{delimiter} README.md\n"
        "# Demo\n"
    )


def render() -> None:
    """Render the Format Guide page."""
    st.header("📖 Format Guide")

    try:
        settings = load_settings()
    except (FileNotFoundError, ValueError) as exc:
        st.error(f"Failed to load configuration: {exc}")
        return

    st.markdown(
        "Each file starts with a header line: the delimiter, at least one "
        f"space, then a path made of `{PATH_TOKEN}`. Everything up to the "
        "next header belongs to that file."
    )

    sample = example_dump(settings.delimiter)
    st.code(sample, language="text")

    st.subheader("Result")
    for record in split(sample, settings.delimiter):
        st.markdown(f"**{record.path}**")
        st.code(record.content or " ", language="text")

    st.subheader("🔧 Configuration")
    st.json(
        {
            "splitter": settings.splitter,
            "archive": settings.archive,
            "ui": settings.ui,
        }
    )
