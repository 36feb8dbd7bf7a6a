import logging

from fastapi import APIRouter, Depends, Query

from pdfi.schemas.document import DeleteDocumentResponse, DocumentHistoryResponse, ErrorResponse
from pdfi.shared.document_store import DocumentStore, get_document_store
from pdfi.shared.exceptions import DocumentNotFoundError, InvalidRequestError, StorageError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["history"])


@router.get(
    "/history",
    response_model=DocumentHistoryResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def get_history(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    store: DocumentStore = Depends(get_document_store),
):
    # No upper bound on limit
    skip = (page - 1) * limit
    logger.info(f"Fetching document history (page={page}, limit={limit})")

    try:
        total = await store.count()
        documents = await store.list_documents(skip=skip, limit=limit)
    except Exception as e:
        logger.error(f"Error fetching history: {e}")
        raise StorageError(f"Failed to fetch history: {e}")

    logger.info(f"Retrieved {len(documents)} documents from history")
    return DocumentHistoryResponse(documents=documents, total=total, page=page, limit=limit)


@router.delete(
    "/history",
    response_model=DeleteDocumentResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def delete_history_document(
    document_id: str | None = Query(None, alias="id"),
    store: DocumentStore = Depends(get_document_store),
):
    if not document_id:
        raise InvalidRequestError("Document ID required")

    logger.info(f"Deleting document: {document_id}")
    try:
        deleted = await store.delete_by_id(document_id)
    except Exception as e:
        logger.error(f"Error deleting document: {e}")
        raise StorageError(f"Failed to delete document: {e}")

    if not deleted:
        raise DocumentNotFoundError("Document not found")

    logger.info("Document deleted successfully")
    return DeleteDocumentResponse(success=True)
