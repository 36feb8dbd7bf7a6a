class SummarizerError(Exception):
    """Base exception for the PDFI Summarizer."""

    status_code: int = 500

    def __init__(self, message: str, detail: str | None = None):
        self.message = message
        self.detail = detail
        super().__init__(self.message)


class ConfigurationError(SummarizerError):
    """Raised when a required setting (such as the API key) is missing."""
    pass


class InvalidRequestError(SummarizerError):
    """Raised when a request is missing a required field or parameter."""

    status_code = 400


class UnsupportedFileTypeError(SummarizerError):
    """Raised when an upload is neither a PDF nor an image."""

    status_code = 400


class DocumentNotFoundError(SummarizerError):
    """Raised when a processed document does not exist."""

    status_code = 404


class InvalidDocumentIdError(SummarizerError):
    """Raised when a document id cannot be parsed by the store."""
    pass


class AIClientError(SummarizerError):
    """Raised when AI API calls fail."""
    pass


class StorageError(SummarizerError):
    """Raised when document store operations fail."""
    pass


class DocumentProcessingError(SummarizerError):
    """Raised when summarizing an upload fails for an unexpected reason."""
    pass
