import uuid
from datetime import datetime

from sqlalchemy import String, Text, Integer, BigInteger, DateTime, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from pdfi.database import Base


class ProcessedDocument(Base):
    __tablename__ = "processed_documents"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    file_name: Mapped[str] = mapped_column(String(500), nullable=False)
    file_type: Mapped[str] = mapped_column(String(255), nullable=False)  # application/pdf or image/*
    file_size: Mapped[int] = mapped_column(BigInteger, nullable=False)
    summary: Mapped[str] = mapped_column(Text, nullable=False)
    processed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), index=True
    )
    processing_time: Mapped[int] = mapped_column(Integer, nullable=False)  # milliseconds
    # Reserved for future user authentication
    user_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
