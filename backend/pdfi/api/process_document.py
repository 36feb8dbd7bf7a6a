import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.concurrency import run_in_threadpool

from pdfi.config import get_settings
from pdfi.schemas.document import ErrorResponse, ProcessDocumentResponse, ProcessedDocumentCreate
from pdfi.shared.ai_client import get_ai_client, is_supported_mime_type
from pdfi.shared.document_store import DocumentStore, get_document_store
from pdfi.shared.exceptions import (
    AIClientError,
    ConfigurationError,
    DocumentProcessingError,
    InvalidRequestError,
    SummarizerError,
    UnsupportedFileTypeError,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["documents"])


@router.post(
    "/process-document",
    response_model=ProcessDocumentResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def process_document(
    file: UploadFile | None = File(None),
    store: DocumentStore = Depends(get_document_store),
):
    start_time = time.monotonic()
    logger.info("Processing document request")

    try:
        settings = get_settings()
        if not settings.anthropic_api_key:
            logger.error("Anthropic API key not configured")
            raise ConfigurationError(
                "Anthropic API key not configured. "
                "Please add ANTHROPIC_API_KEY to your environment variables."
            )

        if file is None:
            logger.error("No file provided")
            raise InvalidRequestError("No file provided")

        content_type = file.content_type or ""
        if not is_supported_mime_type(content_type):
            logger.error(f"Unsupported file type: {content_type}")
            raise UnsupportedFileTypeError(
                "Unsupported file type. Please upload PDF or image files.",
                detail=content_type,
            )

        file_data = await file.read()
        logger.info(f"File received: {file.filename} Type: {content_type} Size: {len(file_data)}")

        ai_client = get_ai_client()
        # The Anthropic SDK call blocks, keep it off the event loop
        summary = await run_in_threadpool(ai_client.summarize, file_data, content_type)

    except AIClientError as e:
        raise DocumentProcessingError(f"Failed to process document: {e.message}", detail=e.detail)
    except SummarizerError:
        raise
    except Exception as e:
        logger.exception(f"Error processing document: {e}")
        raise DocumentProcessingError(f"Failed to process document: {e}")

    record = ProcessedDocumentCreate(
        file_name=file.filename or "",
        file_type=content_type,
        file_size=len(file_data),
        summary=summary,
        processed_at=datetime.now(timezone.utc),
        processing_time=int((time.monotonic() - start_time) * 1000),
    )
    await save_to_history(store, record)

    return ProcessDocumentResponse(summary=summary)


async def save_to_history(store: DocumentStore, record: ProcessedDocumentCreate) -> str | None:
    """Persist a finished summary. A failure is logged and never reaches the caller."""
    try:
        document_id = await store.insert(record)
    except Exception as e:
        logger.warning(f"Failed to save {record.file_name} to history: {e}")
        return None
    logger.info(f"Document saved with ID: {document_id}")
    return document_id
