import base64
import logging
import threading

import anthropic

from pdfi.config import get_settings
from pdfi.shared.exceptions import AIClientError, ConfigurationError, UnsupportedFileTypeError

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"

PDF_SUMMARY_PROMPT = (
    "Please provide a comprehensive summary of this PDF document. "
    "Include the main topics, key points, and important details. "
    "Make the summary clear and well-structured."
)

IMAGE_SUMMARY_PROMPT = (
    "Please analyze this image and provide a detailed description. "
    "Include any text you can read, objects you can identify, "
    "and the overall context or purpose of the image."
)


def is_supported_mime_type(mime_type: str | None) -> bool:
    """Only PDFs and images are ever forwarded to the model."""
    if not mime_type:
        return False
    return mime_type == PDF_MIME_TYPE or mime_type.startswith("image/")


class AIClient:
    """Claude API wrapper that turns an uploaded PDF or image into a text summary."""

    def __init__(self):
        settings = get_settings()
        if not settings.anthropic_api_key:
            raise ConfigurationError(
                "Anthropic API key not configured. "
                "Please add ANTHROPIC_API_KEY to your environment variables."
            )
        self.client = anthropic.Anthropic(api_key=settings.anthropic_api_key)
        self.model = settings.anthropic_model
        self.max_tokens = settings.anthropic_max_tokens
        self.total_input_tokens = 0
        self.total_output_tokens = 0
        # summarize runs on threadpool workers
        self._usage_lock = threading.Lock()

    def summarize(self, file_data: bytes, mime_type: str) -> str:
        """Send the file to Claude with the prompt for its type and return the reply text.

        Single blocking call: no retry and no streaming.
        """
        content = self._build_content(file_data, mime_type)
        logger.info(f"Sending {mime_type} to Claude, encoded size: {len(content[0]['source']['data'])}")
        try:
            response = self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                messages=[{"role": "user", "content": content}],
            )
        except anthropic.APIError as e:
            logger.error(f"Claude API error: {e}")
            raise AIClientError(f"Anthropic API call failed: {e}")

        self._track_usage(response.usage)
        summary = "".join(block.text for block in response.content if block.type == "text").strip()
        if not summary:
            raise AIClientError("Anthropic API returned an empty summary")
        logger.info(f"Summary generated, length: {len(summary)}")
        return summary

    @staticmethod
    def _build_content(file_data: bytes, mime_type: str) -> list[dict]:
        encoded = base64.standard_b64encode(file_data).decode("ascii")
        source = {"type": "base64", "media_type": mime_type, "data": encoded}

        if mime_type == PDF_MIME_TYPE:
            return [
                {"type": "document", "source": source},
                {"type": "text", "text": PDF_SUMMARY_PROMPT},
            ]
        if mime_type.startswith("image/"):
            return [
                {"type": "image", "source": source},
                {"type": "text", "text": IMAGE_SUMMARY_PROMPT},
            ]
        raise UnsupportedFileTypeError(
            "Unsupported file type. Please upload PDF or image files.",
            detail=mime_type,
        )

    def _track_usage(self, usage):
        with self._usage_lock:
            self.total_input_tokens += usage.input_tokens
            self.total_output_tokens += usage.output_tokens
        logger.debug(
            f"Token usage - input: {usage.input_tokens}, output: {usage.output_tokens}, "
            f"total_input: {self.total_input_tokens}, total_output: {self.total_output_tokens}"
        )

    def get_usage_stats(self) -> dict[str, int]:
        with self._usage_lock:
            return {
                "total_input_tokens": self.total_input_tokens,
                "total_output_tokens": self.total_output_tokens,
            }


# Singleton instance
_ai_client: AIClient | None = None


def get_ai_client() -> AIClient:
    global _ai_client
    if _ai_client is None:
        _ai_client = AIClient()
    return _ai_client
