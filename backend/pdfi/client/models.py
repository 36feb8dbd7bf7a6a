import enum
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from pdfi.schemas.document import ProcessedDocumentResponse

# Synthetic milestones, not real transfer progress
PROGRESS_QUEUED = 0
PROGRESS_SENDING = 25
PROGRESS_RESPONDED = 75
PROGRESS_DONE = 100


class FileStatus(str, enum.Enum):
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


class InvalidTransitionError(Exception):
    """Raised when a file is moved out of a terminal state."""
    pass


@dataclass
class UploadItem:
    """A file picked by the user, before it is sent anywhere."""

    name: str
    type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


def _new_file_id() -> str:
    return uuid.uuid4().hex[:9]


@dataclass
class ProcessedFile:
    """One file's state in the current session or in the fetched history."""

    name: str
    type: str
    size: int
    id: str = field(default_factory=_new_file_id)
    summary: str = ""
    status: FileStatus = FileStatus.PROCESSING
    progress: int = PROGRESS_QUEUED
    processed_at: datetime | None = None
    created_at: datetime | None = None

    @classmethod
    def from_upload(cls, upload: UploadItem) -> "ProcessedFile":
        return cls(
            name=upload.name,
            type=upload.type,
            size=upload.size,
            created_at=datetime.now(timezone.utc),
        )

    @classmethod
    def from_history(cls, doc: ProcessedDocumentResponse) -> "ProcessedFile":
        processed_at = None
        if doc.processed_at:
            # fromisoformat only accepts a trailing Z from Python 3.11 on
            processed_at = datetime.fromisoformat(doc.processed_at.replace("Z", "+00:00"))
        return cls(
            id=doc.id,
            name=doc.file_name,
            type=doc.file_type,
            size=max(doc.file_size, 0),
            summary=doc.summary or "",
            status=FileStatus.COMPLETED,
            progress=PROGRESS_DONE,
            processed_at=processed_at,
        )

    @property
    def is_image(self) -> bool:
        return self.type.startswith("image/")

    @property
    def is_terminal(self) -> bool:
        return self.status is not FileStatus.PROCESSING

    def advance(self, progress: int) -> None:
        self._require_processing()
        self.progress = progress

    def complete(self, summary: str) -> None:
        self._require_processing()
        self.summary = summary
        self.status = FileStatus.COMPLETED
        self.progress = PROGRESS_DONE
        self.processed_at = datetime.now(timezone.utc)

    def fail(self, message: str) -> None:
        self._require_processing()
        self.summary = f"Error: {message}"
        self.status = FileStatus.ERROR
        self.progress = PROGRESS_QUEUED

    def sort_key(self) -> datetime:
        return self.processed_at or self.created_at or datetime.min.replace(tzinfo=timezone.utc)

    def _require_processing(self) -> None:
        if self.is_terminal:
            raise InvalidTransitionError(f"File {self.name} is already {self.status.value}")
