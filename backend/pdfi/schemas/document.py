from datetime import datetime

from pydantic import BaseModel, Field


class ProcessedDocumentCreate(BaseModel):
    file_name: str
    file_type: str
    file_size: int = Field(..., ge=0)
    summary: str = Field(..., min_length=1)
    processed_at: datetime
    processing_time: int = Field(..., ge=0)


class ProcessedDocumentResponse(BaseModel):
    """Canonical record shape: string id and ISO-8601 timestamp, camelCase on the wire."""

    id: str = Field(alias="_id")
    file_name: str = Field(alias="fileName")
    file_type: str = Field(alias="fileType")
    file_size: int = Field(alias="fileSize")
    summary: str
    processed_at: str = Field(alias="processedAt")
    processing_time: int = Field(alias="processingTime")

    model_config = {"populate_by_name": True}


class DocumentHistoryResponse(BaseModel):
    documents: list[ProcessedDocumentResponse]
    total: int
    page: int
    limit: int


class ProcessDocumentResponse(BaseModel):
    summary: str


class DeleteDocumentResponse(BaseModel):
    success: bool = True


class ErrorResponse(BaseModel):
    error: str
