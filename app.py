"""Keysmith -- Streamlit web interface."""

import streamlit as st

from keysmith import (
    DEFAULT_LENGTH,
    EXPORT_FILENAME,
    MAX_HISTORY,
    GenerationConfig,
    PasswordHistory,
    generate,
    score_strength,
)

# ── Lucide icons (from lucide.dev) ────────────────────────────────────────

_LUCIDE = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="{s}" height="{s}" '
    'viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2" '
    'stroke-linecap="round" stroke-linejoin="round">{paths}</svg>'
)

ICON_KEY_ROUND = _LUCIDE.format(s=32, paths=(
    '<path d="M2.586 17.414A2 2 0 0 0 2 18.828V21a1 1 0 0 0 1 1h3'
    'a1 1 0 0 0 1-1v-1a1 1 0 0 1 1-1h1a1 1 0 0 0 1-1v-1'
    'a1 1 0 0 1 1-1h.172a2 2 0 0 0 1.414-.586l.814-.814'
    'a6.5 6.5 0 1 0-4-4z"/>'
    '<circle cx="16.5" cy="7.5" r=".5" fill="currentColor"/>'
))

ICON_HISTORY = _LUCIDE.format(s=20, paths=(
    '<path d="M3 12a9 9 0 1 0 9-9 9.75 9.75 0 0 0-6.74 2.74L3 8"/>'
    '<path d="M3 3v5h5"/><path d="M12 7v5l4 2"/>'
))

# Same thresholds as the scorer's labels
COLORS = {
    "Strong": "#388e3c",
    "Medium": "#fbc02d",
    "Weak": "#f57c00",
    "Very weak": "#d32f2f",
}


def show_strength(password: str) -> None:
    report = score_strength(password)
    color = COLORS[report["label"]]
    st.markdown(
        f"**Strength:** <span style='color:{color}'>{report['label']}</span>"
        f" &nbsp;·&nbsp; {report['score']}%",
        unsafe_allow_html=True,
    )
    st.progress(report["score"] / 100)


# ── Page config ───────────────────────────────────────────────────────────

st.set_page_config(
    page_title="Keysmith",
    page_icon="\U0001f511",
    layout="centered",
)

# Each browser session owns its history
if "history" not in st.session_state:
    st.session_state.history = PasswordHistory()
history: PasswordHistory = st.session_state.history

# ── Header ────────────────────────────────────────────────────────────────

st.markdown(
    f'<h1 style="display:flex;align-items:center;gap:10px">'
    f'{ICON_KEY_ROUND} Keysmith</h1>',
    unsafe_allow_html=True,
)
st.caption(
    "Generate passwords locally and see how strong they look.  \n"
    "Nothing leaves this page: there are no network lookups."
)

tab_generate, tab_check = st.tabs(["Generate Password", "Check Password"])

# ── Generate tab ───────────────────────────────────────────────────────────

with tab_generate:
    col1, col2 = st.columns(2)
    with col1:
        length = st.slider("Length", 4, 64, DEFAULT_LENGTH)
        avoid_ambiguous = st.checkbox("Avoid look-alikes (0 O 1 l I)")
    with col2:
        use_upper = st.checkbox("Uppercase", value=True)
        use_lower = st.checkbox("Lowercase", value=True)
        use_digits = st.checkbox("Digits", value=True)
        use_symbols = st.checkbox("Symbols", value=True)

    if st.button("Generate password", type="primary"):
        config = GenerationConfig(
            length=length,
            uppercase=use_upper,
            lowercase=use_lower,
            digits=use_digits,
            symbols=use_symbols,
            exclude_ambiguous=avoid_ambiguous,
        )
        entry = generate(config)
        if entry is None:
            st.warning("Select at least one character type.", icon="⚠️")
        else:
            history.push(entry)
            st.session_state.current = entry.text

    current = st.session_state.get("current")
    if current:
        st.code(current, language=None)
        show_strength(current)

    # ── History ──
    st.markdown(
        f'<p style="display:flex;align-items:center;gap:6px;margin-top:1.5rem">'
        f'{ICON_HISTORY} <strong>Last {MAX_HISTORY} passwords</strong></p>',
        unsafe_allow_html=True,
    )
    if not len(history):
        st.caption("No history yet.")
    for entry in history:
        st.code(entry.text, language=None)

    col_export, col_clear = st.columns(2)
    with col_export:
        st.download_button(
            "Export history",
            data=history.export(),
            file_name=EXPORT_FILENAME,
            mime="text/plain",
            disabled=not len(history),
        )
    with col_clear:
        if st.button("Clear history", disabled=not len(history)):
            history.clear()
            st.rerun()

# ── Check tab ──────────────────────────────────────────────────────────────

with tab_check:
    password = st.text_input(
        "Password",
        type="default",
        placeholder="Enter a password…",
        autocomplete="off",
    )
    if password:
        show_strength(password)
