import os
import streamlit as st
import pandas as pd
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from overlap_checker.core.config import DetectorConfig, ExtractionConfig
from overlap_checker.core.document_reader import DocumentReader
from overlap_checker.core.logging_config import setup_logging
from overlap_checker.core.models import similarity_level
from overlap_checker.core.session import DetectionSession, UploadTracker
from overlap_checker.core.similarity import SimilarityEngine
from overlap_checker.core.validation import ValidationError

setup_logging(
    log_level=os.getenv("LOG_LEVEL", "INFO"),
    log_dir=os.getenv("LOG_DIR", "logs"),
    structured_logging=os.getenv("LOG_STRUCTURED", "true").lower() == "true",
    enable_console=True,
    enable_file=True
)

LEVEL_STYLES = {
    "low": ("low-similarity", "Low"),
    "medium": ("medium-similarity", "Medium"),
    "high": ("high-similarity", "High"),
}

FILE_ICONS = {
    "application/pdf": "📕",
    "text/plain": "📄",
}


def create_session() -> DetectionSession:
    extraction_config = ExtractionConfig.from_env()
    return DetectionSession(
        engine=SimilarityEngine(DetectorConfig.from_env()),
        reader=DocumentReader(extraction_config),
        config=extraction_config,
    )


def initialize_session_state():
    """Initialize all session state variables."""
    if "detection_session" not in st.session_state:
        st.session_state.detection_session = create_session()
    if "last_error" not in st.session_state:
        st.session_state.last_error = None
    if "upload_tracker" not in st.session_state:
        st.session_state.upload_tracker = UploadTracker()


def initialize_app():
    """Set up the page and its styling."""
    st.set_page_config(
        page_title="📚 Document Overlap Checker",
        page_icon="📚",
        layout="wide",
    )
    st.markdown("""
    <style>
    .similarity-badge { padding: 0.2rem 0.6rem; border-radius: 0.5rem; font-weight: 600; }
    .low-similarity { background: #dcfce7; color: #166534; }
    .medium-similarity { background: #fef9c3; color: #854d0e; }
    .high-similarity { background: #fee2e2; color: #991b1b; }
    </style>
    """, unsafe_allow_html=True)
    st.title("📚 Document Overlap Checker")
    st.caption("Upload PDF or TXT files one at a time. Each upload is compared with every document checked before it.")


def handle_upload():
    """Sidebar uploader; checks a new file once per upload."""
    session = st.session_state.detection_session
    tracker = st.session_state.upload_tracker

    st.sidebar.markdown("### 📤 Upload a Document")
    uploaded = st.sidebar.file_uploader(
        "Choose a PDF or TXT file",
        type=["pdf", "txt"],
        help="Files larger than the configured limit are rejected",
        key=tracker.uploader_key,
    )

    if uploaded is None:
        return

    if not tracker.should_process(uploaded.name, uploaded.size):
        return

    with st.spinner(f"Checking {uploaded.name}..."):
        try:
            session.submit_bytes(uploaded.getvalue(), uploaded.name, uploaded.type or None)
            st.session_state.last_error = None
        except ValidationError as e:
            st.session_state.last_error = str(e)


def display_result(result):
    """Render one checked document with its sentence matches."""
    session = st.session_state.detection_session
    css_class, label = LEVEL_STYLES[similarity_level(result.similarity)]
    icon = FILE_ICONS.get(result.file_type, "📄")

    with st.expander(f"{icon} {result.file_name} | {result.similarity}% similar", expanded=True):
        st.markdown(
            f'<span class="similarity-badge {css_class}">{label} similarity: {result.similarity}%</span>',
            unsafe_allow_html=True
        )

        col1, col2, col3 = st.columns(3)
        col1.metric("Words", result.word_count)
        col2.metric("Pages", result.page_count if result.page_count is not None else "n/a")
        col3.metric("Checked", result.timestamp.strftime("%H:%M:%S"))

        if result.matches:
            st.markdown("**Matching sentences:**")
            df = pd.DataFrame(
                [(m.similarity, m.source_file, m.sentence) for m in result.matches],
                columns=["Similarity (%)", "Source", "Sentence"]
            )
            st.dataframe(df, hide_index=True, use_container_width=True)
        else:
            st.info("No closely matching sentences found.")

        if st.button("🗑️ Delete", key=f"delete-{result.id}"):
            session.remove(result.id)
            st.session_state.upload_tracker.reset()
            st.rerun()


def main():
    """Main application function."""
    initialize_app()
    initialize_session_state()
    handle_upload()

    session = st.session_state.detection_session

    st.sidebar.markdown("---")
    st.sidebar.markdown(f"**Documents checked:** {len(session)}")
    if len(session) and st.sidebar.button("🔄 Clear All"):
        session.clear()
        st.session_state.upload_tracker.reset()
        st.rerun()

    if st.session_state.last_error:
        st.error(f"❌ {st.session_state.last_error}")

    results = session.results
    if not results:
        st.info("👈 Upload a document in the sidebar to get started.")
        return

    st.markdown("## 📊 Results")
    for result in results:
        display_result(result)


if __name__ == "__main__":
    main()
