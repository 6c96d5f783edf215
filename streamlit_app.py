#!/usr/bin/env python3
"""
GrammarGuard Streamlit Application

A web-based writing assistant: paste or upload text, see a spelling and
punctuation critique with the corrected text, word statistics and a shortened
version, and reopen recent checks from the history.

Key UI Components:
- Input: Text area and file upload (.txt, .pdf, .docx)
- Corrected Text: Highlighted error spans with the message as tooltip
- Analysis: Word, character and sentence counts, long and common words
- Sidebar: History (load/delete) and settings (theme, language, font size,
  automatic corrections)

Run with: streamlit run streamlit_app.py
"""

from dataclasses import replace

import streamlit as st

from grammarguard.config import Config
from grammarguard.correction import highlight_errors
from grammarguard.history import HistoryStore
from grammarguard.i18n import translate
from grammarguard.ingest import IngestError, extract_text_from_bytes, get_supported_extensions
from grammarguard.logging_utils import setup_logger
from grammarguard.pipeline import CheckReport, check_text, record_check
from grammarguard.settings import (
    MAX_FONT_SIZE,
    MIN_FONT_SIZE,
    Settings,
    load_settings,
    save_settings,
)

# Configure Streamlit page
st.set_page_config(
    page_title="GrammarGuard",
    page_icon="📖",
    layout="wide",
    initial_sidebar_state="expanded",
)


def initialize_session_state():
    """Initialize Streamlit session state variables."""

    if "config" not in st.session_state:
        st.session_state.config = Config()

    if "logger" not in st.session_state:
        st.session_state.logger = setup_logger(st.session_state.config)

    if "settings" not in st.session_state:
        st.session_state.settings = load_settings(config=st.session_state.config)

    if "history_store" not in st.session_state:
        st.session_state.history_store = HistoryStore(config=st.session_state.config)

    if "text" not in st.session_state:
        st.session_state.text = ""

    if "last_recorded" not in st.session_state:
        st.session_state.last_recorded = None


def t(key: str) -> str:
    return translate(st.session_state.settings.language, key)


def update_settings(**changes):
    """Validate, store and persist changed settings."""
    settings = replace(st.session_state.settings, **changes)
    st.session_state.settings = settings
    try:
        save_settings(settings, config=st.session_state.config)
    except OSError as e:
        st.error(f"Failed to save settings: {e}")


def apply_theme(settings: Settings):
    """Inject CSS for the theme, the font size and highlighted errors."""
    background, foreground = ("#111827", "#F9FAFB") if settings.theme == "dark" else (
        "#F9FAFB",
        "#111827",
    )
    st.markdown(
        f"""
    <style>
    .stApp {{
        background-color: {background};
        color: {foreground};
    }}
    .corrected-text {{
        font-size: {settings.font_size}px;
        line-height: 1.6;
        word-break: break-word;
        border: 1px solid #E5E7EB;
        border-radius: 8px;
        padding: 1rem;
    }}
    .corrected-text .error {{
        color: #DC2626;
        font-weight: bold;
        cursor: help;
    }}
    .corrected-text .error.punctuation {{
        color: #D97706;
    }}
    </style>
    """,
        unsafe_allow_html=True,
    )


def settings_sidebar():
    """Settings controls in the sidebar."""
    settings = st.session_state.settings

    with st.sidebar.expander(f"⚙️ {t('settings')}"):
        dark = st.toggle(t("dark_mode"), value=settings.theme == "dark")
        if dark != (settings.theme == "dark"):
            update_settings(theme="dark" if dark else "light")
            st.rerun()

        languages = ["en", "ru"]
        language = st.selectbox(
            t("language"),
            languages,
            index=languages.index(settings.language),
            format_func=lambda code: {"en": "English", "ru": "Русский"}[code],
        )
        if language != settings.language:
            update_settings(language=language)
            st.rerun()

        font_size = st.slider(
            t("font_size"), MIN_FONT_SIZE, MAX_FONT_SIZE, settings.font_size
        )
        if font_size != settings.font_size:
            update_settings(font_size=font_size)

        auto_apply = st.checkbox(t("auto_apply"), value=settings.auto_apply_corrections)
        if auto_apply != settings.auto_apply_corrections:
            update_settings(auto_apply_corrections=auto_apply)

        if st.button(t("reset")):
            st.session_state.settings = Settings()
            update_settings()
            st.rerun()


def history_sidebar():
    """Recent checks with load and delete buttons."""
    store = st.session_state.history_store

    st.sidebar.subheader(f"🕘 {t('history')}")
    entries = store.load()

    if not entries:
        st.sidebar.caption(t("no_history"))
        return

    for entry in entries:
        with st.sidebar.container(border=True):
            st.caption(f"{entry.preview}")
            st.caption(f"{len(entry.errors)} · {entry.language}")
            col1, col2 = st.columns(2)
            if col1.button(t("load"), key=f"load_{entry.id}"):
                st.session_state.text = entry.original_text
                st.session_state.last_recorded = entry.original_text
                st.toast(t("history_loaded"))
                st.rerun()
            if col2.button(t("delete"), key=f"delete_{entry.id}"):
                store.delete(entry.id)
                st.toast(t("history_deleted"))
                st.rerun()


def input_interface():
    """Text area and file upload."""
    st.subheader(t("input_text"))

    streamlit_exts = [ext.lstrip(".") for ext in get_supported_extensions()]
    uploaded_file = st.file_uploader(
        t("upload_file"),
        type=streamlit_exts,
        help=f"Supported formats: {', '.join(get_supported_extensions())}",
    )

    if uploaded_file is not None and st.session_state.get("uploaded_name") != uploaded_file.name:
        try:
            st.session_state.text = extract_text_from_bytes(
                uploaded_file.name, uploaded_file.getvalue(), st.session_state.config
            )
            st.session_state.uploaded_name = uploaded_file.name
        except IngestError as e:
            st.session_state.logger.error(f"Upload failed: {e}")
            st.error(f"{t('file_error')}: {e.code.value}")

    st.text_area(
        t("input_text"),
        key="text",
        height=250,
        placeholder=t("enter_text"),
        label_visibility="collapsed",
    )


def corrected_text_interface(report: CheckReport):
    """Corrected text with highlighted errors."""
    header, issues = st.columns([3, 2])
    header.subheader(t("corrected_text"))
    if report.errors:
        issues.warning(f"⚠️ {len(report.errors)} {t('issues_found')}")

    if not report.text:
        st.info(t("no_analysis"))
        return

    st.markdown(
        f'<div class="corrected-text">{highlight_errors(report.text, report.errors)}</div>',
        unsafe_allow_html=True,
    )


def analysis_interface(report: CheckReport):
    """Word statistics, long words and common words."""
    analysis = report.analysis

    st.markdown(f"**{t('word_stats')}**")
    col1, col2, col3, col4 = st.columns(4)
    col1.metric(t("words"), analysis.word_count)
    col2.metric(t("characters"), analysis.character_count)
    col3.metric(t("sentences"), analysis.sentence_count)
    if analysis.average_word_length > 0:
        col4.metric(t("average_word_length"), f"{analysis.average_word_length:.2f}")

    col1, col2 = st.columns(2)
    with col1:
        st.markdown(f"**{t('long_words')}**")
        if analysis.long_words:
            for word in analysis.long_words:
                st.markdown(f"- {word}")
        else:
            st.caption(t("no_long_words"))

    with col2:
        st.markdown(f"**{t('common_words')}**")
        if analysis.common_words:
            st.dataframe(
                [{"word": item.word, "count": item.count} for item in analysis.common_words],
                hide_index=True,
                use_container_width=True,
            )
        else:
            st.caption(t("no_common_words"))


def shortened_text_interface(report: CheckReport):
    st.subheader(t("shortened_text"))
    if report.summary:
        st.write(report.summary)
    else:
        st.caption(t("no_text"))


def main():
    """Main Streamlit application."""

    initialize_session_state()
    settings = st.session_state.settings
    apply_theme(settings)

    st.title(f"📖 {t('title')}")

    history_sidebar()
    settings_sidebar()

    left, right = st.columns(2)

    with left:
        input_interface()

    report = check_text(
        st.session_state.text, settings=settings, config=st.session_state.config
    )

    # Record each distinct text once; reruns for unrelated widgets do not add entries
    if report.has_text and st.session_state.last_recorded != report.text:
        record_check(report, st.session_state.history_store, settings.language)
        st.session_state.last_recorded = report.text

    with right:
        corrected_text_interface(report)

    tab1, tab2 = st.tabs(
        [f"📊 {t('analysis_results')}", f"✂️ {t('shortened_text')}"]
    )
    with tab1:
        analysis_interface(report)
    with tab2:
        shortened_text_interface(report)


if __name__ == "__main__":
    main()
