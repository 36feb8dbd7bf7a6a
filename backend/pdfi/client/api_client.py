import logging

import httpx
from pydantic import ValidationError

from pdfi.client.models import UploadItem
from pdfi.config import get_settings
from pdfi.schemas.document import DocumentHistoryResponse

logger = logging.getLogger(__name__)


class SummarizerAPIError(Exception):
    """Raised when a call to the summarizer API fails; the message is shown to the user as-is."""
    pass


class SummarizerAPIClient:
    """Blocking HTTP client for the process-document and history endpoints."""

    def __init__(self, base_url: str | None = None, http_client: httpx.Client | None = None):
        if http_client is None:
            base_url = base_url or get_settings().api_base_url
            # No application-level timeout: a slow model call keeps the file in processing
            http_client = httpx.Client(base_url=base_url, timeout=None)
        self.http = http_client

    def send_document(self, upload: UploadItem) -> httpx.Response:
        """POST the file as multipart field 'file' and return the raw response."""
        try:
            return self.http.post(
                "/api/process-document",
                files={"file": (upload.name, upload.data, upload.type)},
            )
        except httpx.HTTPError as e:
            raise SummarizerAPIError(str(e) or e.__class__.__name__)

    @staticmethod
    def read_summary(response: httpx.Response) -> str:
        """Extract the summary from a process-document response, or raise with the server's error."""
        if not response.is_success:
            error = None
            try:
                body = response.json()
                if isinstance(body, dict):
                    error = body.get("error")
            except ValueError:
                pass
            logger.error(f"API error: {response.status_code} {error}")
            raise SummarizerAPIError(error or f"HTTP {response.status_code}: {response.reason_phrase}")

        try:
            body = response.json()
        except ValueError as e:
            raise SummarizerAPIError(f"Invalid response from API: {e}")

        summary = body.get("summary") if isinstance(body, dict) else None
        if not summary:
            raise SummarizerAPIError("No summary received from API")
        return summary

    def fetch_history(self, page: int = 1, limit: int | None = None) -> DocumentHistoryResponse:
        if limit is None:
            limit = get_settings().history_fetch_limit
        try:
            response = self.http.get("/api/history", params={"page": page, "limit": limit})
            response.raise_for_status()
            return DocumentHistoryResponse.model_validate(response.json())
        except (httpx.HTTPError, ValueError, ValidationError) as e:
            raise SummarizerAPIError(f"Failed to load history: {e}")

    def delete_document(self, document_id: str) -> bool:
        """Returns True when the server confirmed the deletion."""
        try:
            response = self.http.delete("/api/history", params={"id": document_id})
        except httpx.HTTPError as e:
            raise SummarizerAPIError(f"Failed to delete document: {e}")
        if not response.is_success:
            logger.warning(f"Delete of {document_id} returned HTTP {response.status_code}")
        return response.is_success
