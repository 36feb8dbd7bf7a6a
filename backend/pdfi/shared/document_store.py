import logging
import uuid
from datetime import datetime, timezone

from fastapi import Depends
from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pdfi.database import get_db
from pdfi.models.document import ProcessedDocument
from pdfi.schemas.document import ProcessedDocumentCreate, ProcessedDocumentResponse
from pdfi.shared.exceptions import InvalidDocumentIdError, StorageError

logger = logging.getLogger(__name__)


def parse_document_id(document_id: str) -> uuid.UUID:
    """Parse a client-supplied id into the store's native identifier."""
    try:
        return uuid.UUID(str(document_id))
    except (ValueError, AttributeError):
        raise InvalidDocumentIdError(
            f"Invalid document id: {document_id}",
            detail="Document ids are UUID strings",
        )


def _normalize_timestamp(value: datetime | str) -> str:
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is None:
        # Backends without timezone support hand back naive UTC values
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


def to_response(doc: ProcessedDocument) -> ProcessedDocumentResponse:
    """Normalize a stored row into the canonical record shape."""
    return ProcessedDocumentResponse(
        id=str(doc.id),
        file_name=doc.file_name,
        file_type=doc.file_type,
        file_size=doc.file_size,
        summary=doc.summary,
        processed_at=_normalize_timestamp(doc.processed_at),
        processing_time=doc.processing_time,
    )


class DocumentStore:
    """Insert, list, count and delete operations on the processed_documents table."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def insert(self, record: ProcessedDocumentCreate) -> str:
        """Persist a completed record. Returns the new id as a string."""
        doc = ProcessedDocument(**record.model_dump())
        self.session.add(doc)
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Insert failed: {e}")
            raise StorageError(f"Failed to save document: {e}")
        logger.info(f"Saved document {doc.id} ({record.file_name})")
        return str(doc.id)

    async def list_documents(self, skip: int, limit: int) -> list[ProcessedDocumentResponse]:
        """Return one page of records, most recently processed first."""
        query = (
            select(ProcessedDocument)
            .order_by(ProcessedDocument.processed_at.desc())
            .offset(skip)
            .limit(limit)
        )
        result = await self.session.execute(query)
        return [to_response(doc) for doc in result.scalars().all()]

    async def count(self) -> int:
        result = await self.session.execute(select(func.count(ProcessedDocument.id)))
        return result.scalar() or 0

    async def delete_by_id(self, document_id: str) -> bool:
        """Delete one record. Returns False when nothing matched the id.

        Raises:
            InvalidDocumentIdError: if the id is not a valid UUID string.
        """
        doc_uuid = parse_document_id(document_id)
        result = await self.session.execute(
            delete(ProcessedDocument).where(ProcessedDocument.id == doc_uuid)
        )
        await self.session.commit()
        deleted = (result.rowcount or 0) > 0
        if deleted:
            logger.info(f"Deleted document {doc_uuid}")
        return deleted


async def get_document_store(db: AsyncSession = Depends(get_db)) -> DocumentStore:
    return DocumentStore(db)
