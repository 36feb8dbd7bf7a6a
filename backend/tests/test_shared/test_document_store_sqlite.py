import asyncio
import uuid
from datetime import datetime, timedelta, timezone

from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from pdfi.database import Base
from pdfi.schemas.document import ProcessedDocumentCreate
from pdfi.shared.document_store import DocumentStore

BASE_TIME = datetime(2025, 1, 1, tzinfo=timezone.utc)


def _record(i: int) -> ProcessedDocumentCreate:
    return ProcessedDocumentCreate(
        file_name=f"d{i}.pdf",
        file_type="application/pdf",
        file_size=100 + i,
        summary=f"Summary {i}",
        processed_at=BASE_TIME + timedelta(minutes=i),
        processing_time=10,
    )


async def _with_store(scenario):
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        async with async_sessionmaker(engine, expire_on_commit=False)() as session:
            return await scenario(DocumentStore(session))
    finally:
        await engine.dispose()


class TestDocumentStoreOnSQLite:
    def test_pages_are_ordered_by_recency(self):
        async def scenario(store: DocumentStore):
            for i in range(25):
                await store.insert(_record(i))
            return await store.list_documents(skip=10, limit=10), await store.count()

        page, total = asyncio.run(_with_store(scenario))

        assert [doc.file_name for doc in page] == [f"d{i}.pdf" for i in range(14, 4, -1)]
        assert total == 25
        assert page[0].processed_at == (BASE_TIME + timedelta(minutes=14)).isoformat()

    def test_delete_by_id_removes_once(self):
        async def scenario(store: DocumentStore):
            document_id = await store.insert(_record(0))
            await store.insert(_record(1))
            first = await store.delete_by_id(document_id)
            second = await store.delete_by_id(document_id)
            missing = await store.delete_by_id(str(uuid.uuid4()))
            remaining = await store.list_documents(skip=0, limit=10)
            return first, second, missing, remaining, await store.count()

        first, second, missing, remaining, total = asyncio.run(_with_store(scenario))

        assert first is True
        assert second is False
        assert missing is False
        assert [doc.file_name for doc in remaining] == ["d1.pdf"]
        assert total == 1

    def test_inserted_id_is_a_uuid_string(self):
        async def scenario(store: DocumentStore):
            document_id = await store.insert(_record(3))
            return document_id, await store.list_documents(skip=0, limit=1)

        document_id, docs = asyncio.run(_with_store(scenario))

        assert str(uuid.UUID(document_id)) == document_id
        assert docs[0].id == document_id
