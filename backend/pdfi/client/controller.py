import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from pdfi.client.api_client import SummarizerAPIClient, SummarizerAPIError
from pdfi.client.formatting import rejection_reason, summary_filename
from pdfi.client.models import (
    PROGRESS_RESPONDED,
    PROGRESS_SENDING,
    ProcessedFile,
    UploadItem,
)
from pdfi.config import get_settings

logger = logging.getLogger(__name__)


@dataclass
class RejectedUpload:
    upload: UploadItem
    reason: str


class DocumentProcessorController:
    """Session state behind the upload page.

    Tracks every dropped file through processing -> completed | error,
    sends uploads one at a time, and keeps a cached copy of the server-side
    history that is replaced wholesale on every refresh.
    """

    def __init__(
        self,
        api: SummarizerAPIClient,
        history_limit: int | None = None,
        max_upload_size_mb: int | None = None,
        on_change: Callable[[], None] | None = None,
    ):
        settings = get_settings()
        self.api = api
        self.history_limit = history_limit or settings.history_fetch_limit
        self.max_upload_size_bytes = (max_upload_size_mb or settings.max_upload_size_mb) * 1024 * 1024
        self.on_change = on_change

        self.files: dict[str, ProcessedFile] = {}
        self.history: list[ProcessedFile] = []
        self.is_processing = False
        self.is_loading_history = False
        self.show_history = False

    # Session files

    def accept(self, uploads: Iterable[UploadItem]) -> tuple[list[UploadItem], list[RejectedUpload]]:
        accepted, rejected = [], []
        for upload in uploads:
            reason = rejection_reason(upload.name, upload.type, upload.size, self.max_upload_size_bytes)
            if reason:
                rejected.append(RejectedUpload(upload, reason))
            else:
                accepted.append(upload)
        return accepted, rejected

    def process_files(self, uploads: Iterable[UploadItem]) -> list[RejectedUpload]:
        """Upload every accepted file in drop order, one request at a time.

        Returns the uploads that were filtered out before processing.
        """
        accepted, rejected = self.accept(uploads)
        for item in rejected:
            logger.warning(f"Rejected upload {item.reason}")
        if not accepted:
            return rejected

        batch = [(upload, ProcessedFile.from_upload(upload)) for upload in accepted]
        for _, file in batch:
            self.files[file.id] = file
        self.is_processing = True
        self._notify()

        try:
            for upload, file in batch:
                self._process_one(upload, file)
        finally:
            self.is_processing = False
            self._notify()
        return rejected

    def _process_one(self, upload: UploadItem, file: ProcessedFile) -> None:
        logger.info(f"Processing file: {upload.name} Type: {upload.type} Size: {upload.size}")
        try:
            file.advance(PROGRESS_SENDING)
            self._notify()

            response = self.api.send_document(upload)
            logger.info(f"API response status: {response.status_code}")
            file.advance(PROGRESS_RESPONDED)
            self._notify()

            summary = self.api.read_summary(response)
        except SummarizerAPIError as e:
            logger.error(f"Error processing file {upload.name}: {e}")
            file.fail(str(e))
            self._notify()
            return

        file.complete(summary)
        self._notify()
        self.refresh_history()

    @property
    def session_files(self) -> list[ProcessedFile]:
        """Session files, newest first."""
        return sorted(self.files.values(), key=ProcessedFile.sort_key, reverse=True)

    # History

    def load_history(self) -> None:
        self.is_loading_history = True
        self._notify()
        try:
            self.refresh_history()
        finally:
            self.is_loading_history = False
            self._notify()

    def refresh_history(self) -> None:
        try:
            result = self.api.fetch_history(limit=self.history_limit)
            history = [ProcessedFile.from_history(doc) for doc in result.documents]
        except (SummarizerAPIError, ValueError) as e:
            logger.error(f"Failed to refresh history: {e}")
            return
        self.history = history
        self._notify()

    @property
    def sorted_history(self) -> list[ProcessedFile]:
        return sorted(self.history, key=ProcessedFile.sort_key, reverse=True)

    def toggle_history(self) -> None:
        self.show_history = not self.show_history
        self._notify()

    def remove_from_history(self, document_id: str) -> bool:
        try:
            deleted = self.api.delete_document(document_id)
        except SummarizerAPIError as e:
            logger.error(f"Failed to remove from history: {e}")
            return False
        if deleted:
            self.history = [item for item in self.history if item.id != document_id]
            self._notify()
        return deleted

    def clear_history(self) -> None:
        try:
            for item in list(self.history):
                self.api.delete_document(item.id)
        except SummarizerAPIError as e:
            logger.error(f"Failed to clear history: {e}")
            return
        self.refresh_history()
        self.history = []
        self._notify()

    # Output

    @staticmethod
    def summary_download(file: ProcessedFile) -> tuple[str, bytes]:
        """File name and plain-text payload for saving a summary."""
        return summary_filename(file.name), file.summary.encode("utf-8")

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change()
