"""Code Splitter – Streamlit application.

Entry-point: ``streamlit run src/ui/app.py``

Pages are registered via ``st.navigation()`` and rendered by their
respective modules under ``pages/``.
"""

from __future__ import annotations

import sys
from pathlib import Path

import streamlit as st

# `streamlit run` puts this file's directory on sys.path, not the repo root
_REPO_ROOT = Path(__file__).resolve().parents[2]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))


# ── Page definitions ─────────────────────────────────────────────────

def _page_code_splitter() -> None:
    from src.ui.pages.code_splitter import render
    render()


def _page_format_guide() -> None:
    from src.ui.pages.format_guide import render
    render()


# ── Navigation ───────────────────────────────────────────────────────

pages = [
    st.Page(_page_code_splitter, title="Code Splitter", icon="✂️", default=True),
    st.Page(_page_format_guide, title="Format Guide", icon="📖"),
]


def main() -> None:
    st.set_page_config(
        page_title="Code Splitter",
        page_icon="✂️",
        layout="centered",
    )

    nav = st.navigation(pages)
    nav.run()


if __name__ == "__main__":
    main()
else:
    # When run directly via `streamlit run app.py`
    main()
