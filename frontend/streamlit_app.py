import asyncio
from html import escape

import httpx
import streamlit as st

from app.core.config import settings
from app.core.errors import FileReadError
from app.core.logging_utils import setup_logging
from app.services.files import encode_file
from app.ui.agenda_view import (
    build_agenda_view,
    parse_session_start,
    stakeholder_html,
    timeline_entry_html,
)
from app.ui.backend import BackendClient
from app.ui.chat_panel import ChatPanel
from app.ui.session import AgendaSession

logger = setup_logging(level=settings.LOG_LEVEL, log_dir=settings.LOG_DIR)

# =====================
# Page config
# =====================
st.set_page_config(
    page_title="Agenda Assistant",
    layout="wide",
)

# =====================
# Custom CSS (SAFE)
# =====================
st.markdown("""
<style>
body { background-color: #F8FAFC; }

/* Header */
.agenda-date {
    color: #2563EB;
    font-size: 13px;
    font-weight: 600;
    letter-spacing: 0.08em;
    text-transform: uppercase;
}
.agenda-overview {
    background: white;
    padding: 1.4rem;
    border-radius: 12px;
    border: 1px solid #E2E8F0;
    color: #475569;
    font-size: 17px;
    margin-bottom: 2rem;
}

/* Timeline */
.timeline-row { display: flex; gap: 1rem; }
.timeline-clock { width: 4.5rem; flex-shrink: 0; padding-top: 0.2rem; }
.timeline-card { flex: 1; }
.timeline-time { text-align: right; font-weight: 700; color: #0F172A; }
.timeline-duration { text-align: right; font-size: 12px; color: #64748B; }
.timeline-card {
    background: white;
    padding: 1rem;
    border-radius: 10px;
    border: 1px solid #F1F5F9;
    margin-bottom: 1.2rem;
}
.timeline-meta { font-size: 12px; color: #64748B; }
.total-badge {
    background: #F1F5F9;
    color: #475569;
    font-size: 12px;
    padding: 2px 8px;
    border-radius: 6px;
}

/* Stakeholders */
.avatar {
    display: inline-block;
    width: 2rem; height: 2rem; line-height: 2rem;
    border-radius: 50%;
    background: #F1F5F9;
    color: #64748B;
    text-align: center;
    font-size: 12px;
    font-weight: 700;
    margin-right: 0.6rem;
}
.empty-note { color: #94A3B8; font-style: italic; font-size: 14px; }

/* Buttons */
button {
    background-color: #2563EB !important;
    color: white !important;
    border-radius: 8px !important;
    font-weight: 600 !important;
}
button:hover { background-color: #1D4ED8 !important; }
</style>
""", unsafe_allow_html=True)

# =====================
# Session state
# =====================
backend = BackendClient(settings.API_URL)

if "agenda_session" not in st.session_state:
    st.session_state.agenda_session = AgendaSession()
if "chat_panel" not in st.session_state:
    st.session_state.chat_panel = ChatPanel(sender=backend.send_chat_message)
if "last_upload" not in st.session_state:
    st.session_state.last_upload = None
if "exports" not in st.session_state:
    st.session_state.exports = {}

session: AgendaSession = st.session_state.agenda_session
chat: ChatPanel = st.session_state.chat_panel


def handle_upload(uploaded) -> None:
    st.session_state.exports = {}
    try:
        payload = encode_file(uploaded.getvalue(), uploaded.name, uploaded.type)
    except FileReadError as e:
        logger.warning("Could not read upload: %s", e)
        session.fail()
        return
    with st.spinner("Analyzing..."):
        asyncio.run(session.upload(payload, backend.generate_agenda))
    chat.context_file = session.file


# =====================
# Sidebar
# =====================
with st.sidebar:
    st.header("📅 Agenda Assistant")
    st.caption("Turn your documents into structured meeting plans instantly.")

    uploaded = st.file_uploader(
        "Upload Document",
        type=["pdf", "txt", "md", "doc", "docx"],
        disabled=session.is_processing,
        help="PDF, TXT, DOCX",
    )
    if uploaded is not None:
        upload_key = (uploaded.name, uploaded.size, getattr(uploaded, "file_id", None))
        if upload_key != st.session_state.last_upload:
            st.session_state.last_upload = upload_key
            handle_upload(uploaded)

    if session.error:
        st.error(session.error)
    elif session.file and not session.is_processing:
        st.success(f"{session.file.name}: successfully processed")

    st.info(
        "**How it works**\n\n"
        "1. Upload a project brief or notes.\n"
        "2. AI extracts stakeholders & topics.\n"
        "3. Review the generated timeline.\n"
        "4. Chat with the AI to refine."
    )

    st.markdown("---")
    chat_label = "✖ Close assistant" if chat.is_open else "💬 Open assistant"
    if st.button(chat_label, use_container_width=True):
        chat.toggle()
        st.rerun()
    st.caption(f"Powered by {settings.AGENDA_MODEL} & {settings.CHAT_MODEL}")


# =====================
# Agenda
# =====================
def render_agenda() -> None:
    if session.agenda is None:
        st.markdown("## No Agenda Yet")
        st.markdown(
            "<p class='empty-note'>Upload a document on the left to generate your smart meeting agenda.</p>",
            unsafe_allow_html=True,
        )
        return

    view = build_agenda_view(session.agenda, start=parse_session_start(settings.SESSION_START))

    st.markdown(f"<div class='agenda-date'>📅 {escape(view.date_label)}</div>", unsafe_allow_html=True)
    st.title(view.title)
    st.markdown(f"<div class='agenda-overview'>{escape(view.overview)}</div>", unsafe_allow_html=True)

    timeline_col, people_col = st.columns([2, 1])

    with timeline_col:
        st.markdown(
            f"### 🕘 Timeline <span class='total-badge'>{view.total_label}</span>",
            unsafe_allow_html=True,
        )
        # HTML rows: columns may only nest one level and the chat already uses one
        for entry in view.timeline:
            st.markdown(timeline_entry_html(entry), unsafe_allow_html=True)

    with people_col:
        st.markdown("### 👥 Stakeholders")
        if view.stakeholders_message:
            st.markdown(f"<p class='empty-note'>{view.stakeholders_message}</p>", unsafe_allow_html=True)
        for person in view.stakeholders:
            st.markdown(stakeholder_html(person), unsafe_allow_html=True)

        st.markdown("#### Download")
        render_downloads()


def render_downloads() -> None:
    exports = st.session_state.exports
    try:
        for fmt in ("markdown", "pdf"):
            if fmt not in exports:
                exports[fmt] = asyncio.run(backend.export_agenda(session.agenda, fmt))
    except httpx.HTTPError as e:
        logger.warning("Export failed: %s", e)
        st.caption("Exports are unavailable right now.")
        return

    st.download_button(
        "Download Markdown",
        exports["markdown"],
        file_name="meeting-agenda.md",
        mime="text/markdown",
        use_container_width=True,
    )
    st.download_button(
        "Download PDF",
        exports["pdf"],
        file_name="meeting-agenda.pdf",
        mime="application/pdf",
        use_container_width=True,
    )


# =====================
# Chat
# =====================
def render_chat() -> None:
    st.markdown("### ✨ Agenda Assistant")
    for turn in chat.transcript:
        with st.chat_message("user" if turn.role == "user" else "assistant"):
            st.write(turn.text)

    with st.form("chat_form", clear_on_submit=True):
        message = st.text_input("Ask a question...", label_visibility="collapsed", placeholder="Ask a question...")
        sent = st.form_submit_button("Send", disabled=chat.is_pending)
    if sent and message.strip():
        with st.spinner("Thinking..."):
            asyncio.run(chat.submit(message))
        st.rerun()


if chat.is_open:
    main_col, chat_col = st.columns([3, 2])
    with main_col:
        render_agenda()
    with chat_col:
        render_chat()
else:
    render_agenda()
