"""Streamlit front end for the summarizer.

Run with: streamlit run backend/pdfi/client/streamlit_app.py
"""
import streamlit as st

from pdfi.client.api_client import SummarizerAPIClient
from pdfi.client.controller import DocumentProcessorController
from pdfi.client.formatting import ACCEPTED_EXTENSIONS, format_file_size
from pdfi.client.models import FileStatus, ProcessedFile, UploadItem
from pdfi.config import get_settings

PROCESSING_MESSAGE = "Processing your documents with AI. This may take a few moments..."


def _get_controller() -> DocumentProcessorController:
    if "controller" not in st.session_state:
        controller = DocumentProcessorController(SummarizerAPIClient())
        controller.load_history()
        st.session_state.controller = controller
        st.session_state.uploader_key = 0
        st.session_state.rejections = []
    return st.session_state.controller


def _file_icon(file: ProcessedFile) -> str:
    return "🖼️" if file.is_image else "📄"


def render_summary(controller: DocumentProcessorController, file: ProcessedFile, key: str, interactive: bool):
    st.markdown("**AI Summary:**")
    st.markdown(file.summary)
    if interactive:
        file_name, payload = controller.summary_download(file)
        st.download_button(
            "Download Summary",
            data=payload,
            file_name=file_name,
            mime="text/plain",
            key=f"download-{key}-{file.id}",
        )


def render_history_toolbar(controller: DocumentProcessorController):
    left, right = st.columns([3, 1])
    with left:
        if controller.is_loading_history:
            label = "Loading History..."
        elif controller.show_history:
            label = "Hide History"
        else:
            label = f"View History ({len(controller.history)})"
        if st.button(label, disabled=controller.is_loading_history, key="toggle-history"):
            controller.toggle_history()
            st.rerun()
    with right:
        if controller.show_history and controller.history:
            if st.button("Clear All", key="clear-history"):
                controller.clear_history()
                st.rerun()
        elif not controller.history and not controller.is_loading_history:
            st.caption("No history yet")


def render_history(controller: DocumentProcessorController):
    if not controller.history:
        st.info("No past documents yet. Upload a PDF or image to see your history here.")
        return

    st.subheader("Processing History")
    for file in controller.sorted_history:
        with st.container(border=True):
            header, actions = st.columns([4, 1])
            with header:
                st.markdown(f"{_file_icon(file)} **{file.name}**")
                details = format_file_size(file.size)
                if file.processed_at:
                    details += f" • {file.processed_at.astimezone():%Y-%m-%d %H:%M:%S}"
                st.caption(details)
            with actions:
                st.caption("✅ Completed")
                if st.button("🗑️", key=f"delete-{file.id}", help="Remove from history"):
                    controller.remove_from_history(file.id)
                    st.rerun()
            render_summary(controller, file, "history", interactive=True)


def render_session(controller: DocumentProcessorController, interactive: bool):
    files = controller.session_files
    if not files:
        return

    st.subheader("Current Session")
    for file in files:
        with st.container(border=True):
            header, badge = st.columns([4, 1])
            with header:
                st.markdown(f"{_file_icon(file)} **{file.name}**")
                st.caption(format_file_size(file.size))
            with badge:
                if file.status is FileStatus.PROCESSING:
                    st.caption("⏳ Processing")
                elif file.status is FileStatus.COMPLETED:
                    st.caption("✅ Completed")
                else:
                    st.caption("⚠️ Error")

            if file.status is FileStatus.PROCESSING:
                st.progress(file.progress / 100, text=f"{file.progress}% complete")
            elif file.status is FileStatus.COMPLETED:
                render_summary(controller, file, "session", interactive)
            elif file.summary.startswith("Error: "):
                st.error(file.summary)
            else:
                st.error("Failed to process this document. Please try again.")


def main():
    st.set_page_config(page_title="PDFI Summarizer", page_icon="📄")
    controller = _get_controller()

    st.title("PDFI Summarizer")
    st.write(
        "Upload images or PDFs and get AI-powered summaries instantly. "
        "Drag and drop your files or click to browse."
    )

    max_size = get_settings().max_upload_size_mb
    uploads = st.file_uploader(
        f"Drag & drop files here • PDF, PNG, JPG, GIF up to {max_size}MB",
        type=[ext.lstrip(".") for ext in ACCEPTED_EXTENSIONS],
        accept_multiple_files=True,
        key=f"uploader-{st.session_state.uploader_key}",
    )
    for reason in st.session_state.rejections:
        st.warning(f"Skipped {reason}")

    st.divider()
    render_history_toolbar(controller)
    if controller.show_history:
        render_history(controller)

    alert = st.empty()
    session_area = st.empty()

    def redraw():
        with alert.container():
            if controller.is_processing:
                st.info(PROCESSING_MESSAGE, icon="⏳")
        with session_area.container():
            render_session(controller, interactive=False)

    if uploads:
        items = [UploadItem(name=u.name, type=u.type or "", data=u.getvalue()) for u in uploads]
        controller.on_change = redraw
        try:
            rejected = controller.process_files(items)
        finally:
            controller.on_change = None
        st.session_state.rejections = [item.reason for item in rejected]
        # A fresh uploader key clears the widget so the same files are not sent twice
        st.session_state.uploader_key += 1
        st.rerun()

    with session_area.container():
        render_session(controller, interactive=True)


main()
