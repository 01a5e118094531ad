"""Code Splitter page – paste or upload a dump, split it, download a ZIP.

Layout:
1. Delimiter input (inline validation) + text area + ``.txt`` uploader
2. Process button → processed files table (path + content preview)
3. Create ZIP → Download ZIP, Start Over

The page keeps one :class:`SessionState` in ``st.session_state`` and
replaces it wholesale from widget callbacks.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List

import streamlit as st

from src.core import session as sess
from src.core.settings import Settings, load_settings
from src.core.types import FileRecord
from src.libs.packager.zip_packager import ZipPackager
from src.observability.logger import configure_logging

STATE_KEY = "code_splitter_state"
DELIMITER_KEY = "cs_delimiter"
INPUT_KEY = "cs_input"
UPLOAD_NONCE_KEY = "cs_upload_nonce"


@st.cache_resource
def _settings() -> Settings:
    settings = load_settings()
    configure_logging(settings)
    return settings


def preview_rows(files: Iterable[FileRecord], limit: int) -> List[Dict[str, Any]]:
    """Rows for the processed-files table."""
    return [
        {"File Path": record.path, "Content Preview": record.preview(limit)}
        for record in files
    ]


def _state() -> sess.SessionState:
    return st.session_state[STATE_KEY]


def _set_state(state: sess.SessionState) -> None:
    st.session_state[STATE_KEY] = state


def _upload_key() -> str:
    return f"cs_upload_{st.session_state[UPLOAD_NONCE_KEY]}"


def _init_state(settings: Settings) -> None:
    if STATE_KEY not in st.session_state:
        _set_state(sess.initial_state(settings.delimiter))
    st.session_state.setdefault(DELIMITER_KEY, _state().delimiter)
    st.session_state.setdefault(INPUT_KEY, _state().input_text)
    st.session_state.setdefault(UPLOAD_NONCE_KEY, 0)


# ── Callbacks ────────────────────────────────────────────────────────

def _on_delimiter_change() -> None:
    _set_state(sess.set_delimiter(_state(), st.session_state[DELIMITER_KEY]))


def _on_input_change() -> None:
    _set_state(sess.set_input(_state(), st.session_state[INPUT_KEY]))


def _on_upload() -> None:
    uploaded = st.session_state.get(_upload_key())
    if uploaded is None:
        return
    new_state = sess.load_upload(_state(), uploaded.getvalue())
    _set_state(new_state)
    st.session_state[INPUT_KEY] = new_state.input_text


def _on_process(settings: Settings) -> None:
    _set_state(sess.process(_state(), settings))


def _on_package(settings: Settings) -> None:
    _set_state(sess.package(_state(), ZipPackager.from_settings(settings)))


def _on_dismiss() -> None:
    _set_state(sess.dismiss_notice(_state()))


def _on_reset() -> None:
    _set_state(sess.reset(_state()))
    st.session_state[INPUT_KEY] = ""
    # a fresh key clears the uploader widget
    st.session_state[UPLOAD_NONCE_KEY] += 1


# ── Rendering ────────────────────────────────────────────────────────

def _render_notice(state: sess.SessionState) -> None:
    if not state.notice:
        return
    col_msg, col_btn = st.columns([5, 1])
    with col_msg:
        st.warning(state.notice)
    with col_btn:
        st.button("Dismiss", key="cs_dismiss", on_click=_on_dismiss)


def _render_input(settings: Settings, state: sess.SessionState) -> None:
    st.text_input(
        "File Delimiter (text that appears before each file path)",
        key=DELIMITER_KEY,
        placeholder=settings.delimiter,
        on_change=_on_delimiter_change,
    )
    if state.delimiter_error:
        st.error(state.delimiter_error)
    st.caption(
        f'Default: `{settings.delimiter}` - Matches lines like "{settings.delimiter} path/to/file.ext"'
    )

    st.text_area(
        "Input",
        key=INPUT_KEY,
        height=256,
        placeholder="Paste your code here with headers according to your pattern...",
        on_change=_on_input_change,
        label_visibility="collapsed",
    )

    st.markdown("<div style='text-align:center'>OR</div>", unsafe_allow_html=True)
    st.file_uploader(
        "Upload a text file",
        type=list(settings.ui.get("upload_types", ["txt"])),
        key=_upload_key(),
        on_change=_on_upload,
    )

    st.button(
        "Process",
        key="cs_process",
        type="primary",
        disabled=not state.can_process,
        on_click=_on_process,
        args=(settings,),
    )


def _render_results(settings: Settings, state: sess.SessionState) -> None:
    st.subheader(f"Processed Files ({len(state.files)})")
    st.dataframe(
        preview_rows(state.files, settings.preview_chars),
        hide_index=True,
    )

    col_zip, col_reset = st.columns(2)
    with col_zip:
        if state.is_archive_ready:
            st.download_button(
                "Download ZIP",
                data=state.archive,
                file_name=settings.archive_name,
                mime="application/zip",
                key="cs_download",
            )
        else:
            st.button("Create ZIP", key="cs_package", on_click=_on_package, args=(settings,))
    with col_reset:
        st.button("Start Over", key="cs_reset", on_click=_on_reset)


def render() -> None:
    """Render the Code Splitter page."""
    st.header("✂️ Code Splitter")

    try:
        settings = _settings()
    except (FileNotFoundError, ValueError) as exc:
        st.error(f"Failed to load configuration: {exc}")
        return

    _init_state(settings)
    st.caption(
        "Split a single file containing multiple scripts into separate files "
        "based on your custom delimiter."
    )

    state = _state()
    _render_notice(state)
    if state.is_processed:
        _render_results(settings, state)
    else:
        _render_input(settings, state)
