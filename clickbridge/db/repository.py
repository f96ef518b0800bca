"""Click stores.

Every store implements the same four coroutines and behaves the same way from
the outside: one row per cid, a second insert for a known cid raises
``DuplicateClickError``, and a lookup for an unknown cid returns ``None``.
"""
import abc
import logging
import os
from datetime import datetime, timezone
from typing import Dict, Optional

from sqlalchemy import select
from sqlalchemy.engine import URL
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from clickbridge.core.exceptions import DuplicateClickError, PersistenceError, StoreNotInitializedError
from clickbridge.db.Models.models import (
    Base,
    ClickItem,
    SLUG_MAX_LENGTH,
    TWCLID_MAX_LENGTH,
    UTM_MAX_LENGTH,
)
from clickbridge.schemas.ClickRecord import ClickRecord

logger = logging.getLogger(__name__)


def _clip(value: Optional[str], max_length: Optional[int] = None) -> Optional[str]:
    if not value:
        return None
    return value[:max_length] if max_length else value


def create_click_record(
    cid: str,
    slug: str,
    twclid: Optional[str] = None,
    utm_source: Optional[str] = None,
    utm_medium: Optional[str] = None,
    utm_campaign: Optional[str] = None,
    utm_content: Optional[str] = None,
    user_agent: Optional[str] = None,
    referer: Optional[str] = None,
    ip_hash: Optional[str] = None,
) -> ClickRecord:
    """Build a record stamped with the current UTC time.

    Empty strings become None and values are clipped to the column widths.
    """
    return ClickRecord(
        cid=cid,
        slug=slug[:SLUG_MAX_LENGTH],
        created_at=datetime.now(timezone.utc),
        twclid=_clip(twclid, TWCLID_MAX_LENGTH),
        utm_source=_clip(utm_source, UTM_MAX_LENGTH),
        utm_medium=_clip(utm_medium, UTM_MAX_LENGTH),
        utm_campaign=_clip(utm_campaign, UTM_MAX_LENGTH),
        utm_content=_clip(utm_content, UTM_MAX_LENGTH),
        user_agent=_clip(user_agent),
        referer=_clip(referer),
        ip_hash=_clip(ip_hash),
    )


class ClickStore(abc.ABC):
    """Storage contract for click records.

    ``init()`` must be awaited before use and again after ``close()``.
    """

    @abc.abstractmethod
    async def init(self) -> None:
        ...

    @abc.abstractmethod
    async def insert_click(self, record: ClickRecord) -> None:
        ...

    @abc.abstractmethod
    async def get_click_by_cid(self, cid: str) -> Optional[ClickRecord]:
        ...

    @abc.abstractmethod
    async def close(self) -> None:
        ...


class InMemoryClickStore(ClickStore):
    """Process-local store for tests. Nothing survives ``close()``."""

    def __init__(self):
        self._clicks: Optional[Dict[str, ClickRecord]] = None
        self._id_counter = 1

    async def init(self) -> None:
        if self._clicks is None:
            self._clicks = {}

    def _require_clicks(self) -> Dict[str, ClickRecord]:
        if self._clicks is None:
            raise StoreNotInitializedError()
        return self._clicks

    async def insert_click(self, record: ClickRecord) -> None:
        clicks = self._require_clicks()
        if record.cid in clicks:
            raise DuplicateClickError(record.cid)
        clicks[record.cid] = record.model_copy(update={"id": self._id_counter})
        self._id_counter += 1

    async def get_click_by_cid(self, cid: str) -> Optional[ClickRecord]:
        stored = self._require_clicks().get(cid)
        return stored.model_copy() if stored else None

    async def close(self) -> None:
        if self._clicks is not None:
            self._clicks.clear()
        self._clicks = None
        self._id_counter = 1


def _to_item(record: ClickRecord) -> ClickItem:
    data = record.model_dump(exclude={"id"})
    created_at = data["created_at"]
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    data["created_at"] = created_at.astimezone(timezone.utc)
    return ClickItem(**data)


def _to_record(item: ClickItem) -> ClickRecord:
    record = ClickRecord.model_validate(item)
    # SQLite hands timestamps back without tzinfo; they were written as UTC
    if record.created_at.tzinfo is None:
        record.created_at = record.created_at.replace(tzinfo=timezone.utc)
    return record


class SqlAlchemyClickStore(ClickStore):
    """Shared implementation for the SQL stores on top of an async engine."""

    def __init__(self):
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker] = None

    @abc.abstractmethod
    def _create_engine(self) -> AsyncEngine:
        ...

    def _prepare(self) -> None:
        """Hook run before the engine is created."""

    async def init(self) -> None:
        if self._engine is not None:
            return
        self._prepare()
        engine = self._create_engine()
        try:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except (SQLAlchemyError, OSError) as e:
            await engine.dispose()
            raise PersistenceError(f"Failed to initialize click store: {e}") from e
        self._engine = engine
        self._session_factory = async_sessionmaker(engine, expire_on_commit=False)
        logger.info("%s initialized", type(self).__name__)

    def _require_session_factory(self) -> async_sessionmaker:
        if self._session_factory is None:
            raise StoreNotInitializedError()
        return self._session_factory

    async def insert_click(self, record: ClickRecord) -> None:
        session_factory = self._require_session_factory()
        async with session_factory() as session:
            try:
                session.add(_to_item(record))
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                logger.warning(
                    "IntegrityError inserting click cid=%s slug=%s: %s",
                    record.cid, record.slug, str(e.orig)
                )
                raise DuplicateClickError(record.cid) from e
            except (SQLAlchemyError, OSError) as e:
                raise PersistenceError(f"Failed to insert click {record.cid}: {e}") from e

    async def get_click_by_cid(self, cid: str) -> Optional[ClickRecord]:
        session_factory = self._require_session_factory()
        async with session_factory() as session:
            try:
                result = await session.execute(select(ClickItem).where(ClickItem.cid == cid))
                item = result.scalar_one_or_none()
            except (SQLAlchemyError, OSError) as e:
                raise PersistenceError(f"Failed to fetch click {cid}: {e}") from e
            return _to_record(item) if item is not None else None

    async def close(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
        self._engine = None
        self._session_factory = None


class SqliteClickStore(SqlAlchemyClickStore):
    """Single-file store for local development. SQLite's file locking
    serializes concurrent writers."""

    def __init__(self, db_path: str = "./data/clicks.db"):
        super().__init__()
        self.db_path = db_path

    def _prepare(self) -> None:
        directory = os.path.dirname(self.db_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

    def _create_engine(self) -> AsyncEngine:
        return create_async_engine(f"sqlite+aiosqlite:///{self.db_path}")


class PostgresClickStore(SqlAlchemyClickStore):
    """Pooled store for production. ``url`` must use the asyncpg driver."""

    def __init__(self, url: URL, connect_args: Optional[dict] = None, pool_size: int = 5):
        super().__init__()
        self.url = url
        self.connect_args = connect_args or {}
        self.pool_size = pool_size

    def _create_engine(self) -> AsyncEngine:
        return create_async_engine(
            self.url,
            pool_size=self.pool_size,
            pool_pre_ping=True,
            connect_args=self.connect_args,
        )
