import uuid
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from pdfi.config import Settings
from pdfi.main import app
from pdfi.schemas.document import ProcessedDocumentCreate, ProcessedDocumentResponse
from pdfi.shared.document_store import get_document_store, parse_document_id
from pdfi.shared.exceptions import StorageError


class FakeDocumentStore:
    """In-memory stand-in for DocumentStore with the same async interface."""

    def __init__(self):
        self.records: list[ProcessedDocumentResponse] = []
        self.fail_insert = False
        self.fail_reads = False
        self.insert_calls = 0

    async def insert(self, record: ProcessedDocumentCreate) -> str:
        self.insert_calls += 1
        if self.fail_insert:
            raise StorageError("connection refused")
        document_id = str(uuid.uuid4())
        self.records.append(
            ProcessedDocumentResponse(
                id=document_id,
                file_name=record.file_name,
                file_type=record.file_type,
                file_size=record.file_size,
                summary=record.summary,
                processed_at=record.processed_at.isoformat(),
                processing_time=record.processing_time,
            )
        )
        return document_id

    async def list_documents(self, skip: int, limit: int) -> list[ProcessedDocumentResponse]:
        if self.fail_reads:
            raise RuntimeError("database unavailable")
        ordered = sorted(self.records, key=lambda r: datetime.fromisoformat(r.processed_at), reverse=True)
        return ordered[skip : skip + limit]

    async def count(self) -> int:
        if self.fail_reads:
            raise RuntimeError("database unavailable")
        return len(self.records)

    async def delete_by_id(self, document_id: str) -> bool:
        parsed = str(parse_document_id(document_id))
        before = len(self.records)
        self.records = [r for r in self.records if r.id != parsed]
        return len(self.records) < before

    def seed(self, count: int) -> list[ProcessedDocumentResponse]:
        """Add `count` records; record i is processed i minutes after the first."""
        base = datetime(2025, 1, 1, tzinfo=timezone.utc)
        for i in range(count):
            self.records.append(
                ProcessedDocumentResponse(
                    id=str(uuid.uuid4()),
                    file_name=f"doc-{i}.pdf",
                    file_type="application/pdf",
                    file_size=1000 + i,
                    summary=f"Summary {i}",
                    processed_at=(base + timedelta(minutes=i)).isoformat(),
                    processing_time=1200,
                )
            )
        return self.records


@pytest.fixture()
def store() -> FakeDocumentStore:
    return FakeDocumentStore()


@pytest.fixture()
def client(store: FakeDocumentStore):
    app.dependency_overrides[get_document_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def ai_client():
    """Patch the summarization gateway used by the process-document endpoint."""
    mock_client = MagicMock()
    mock_client.summarize.return_value = "A concise summary of the document."
    with patch("pdfi.api.process_document.get_ai_client", return_value=mock_client):
        yield mock_client


@pytest.fixture()
def configured_settings():
    settings = Settings(anthropic_api_key="test-key")
    with patch("pdfi.api.process_document.get_settings", return_value=settings):
        yield settings


@pytest.fixture()
def unconfigured_settings():
    settings = Settings(anthropic_api_key="")
    with patch("pdfi.api.process_document.get_settings", return_value=settings):
        yield settings
