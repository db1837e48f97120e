"""Registration store client.

The rest of the app only needs two calls from the store: insert one record,
and read every record newest first. Filtering and grouping happen in memory.
Backend failures surface as :class:`StoreError`.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone

from fastapi.concurrency import run_in_threadpool
from motor.motor_asyncio import AsyncIOMotorCollection
from pydantic import ValidationError
from pymongo.errors import PyMongoError
from sqlalchemy import Engine, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from . import config
from .db import ensure_indexes, mongo_collection, sql_engine
from .errors import StoreError
from .models import Base, RegistrationRow
from .schemas import NewRegistration, Registration

logger = logging.getLogger(__name__)


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def now_bson() -> datetime:
    # BSON dates carry milliseconds; drop the rest so insert and select agree
    now = now_utc()
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored as UTC
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class RegistrationStore(ABC):
    """Interface for registration persistence."""

    async def prepare(self) -> None:
        """Create indexes or tables the backend needs. Safe to call repeatedly."""

    @abstractmethod
    async def insert(self, record: NewRegistration) -> Registration:
        """Persist one record, assigning its id and registration_date."""
        ...

    @abstractmethod
    async def select_all(self) -> list[Registration]:
        """Return every record ordered by registration_date descending."""
        ...


class MongoRegistrationStore(RegistrationStore):
    def __init__(self, collection: AsyncIOMotorCollection) -> None:
        self._collection = collection

    async def prepare(self) -> None:
        await ensure_indexes(self._collection)

    async def insert(self, record: NewRegistration) -> Registration:
        doc = record.model_dump()
        doc["registration_date"] = now_bson()
        try:
            result = await self._collection.insert_one(doc)
        except PyMongoError as e:
            logger.error("Mongo insert failed: %s", e)
            raise StoreError("insert") from e
        doc.pop("_id", None)
        return Registration(id=str(result.inserted_id), **doc)

    async def select_all(self) -> list[Registration]:
        cursor = self._collection.find({}).sort([("registration_date", -1), ("_id", -1)])
        try:
            docs = await cursor.to_list(length=None)
            return [self._from_document(d) for d in docs]
        except (PyMongoError, KeyError, ValidationError) as e:
            logger.error("Mongo select failed: %s", e)
            raise StoreError("select") from e

    @staticmethod
    def _from_document(doc: dict) -> Registration:
        d = dict(doc)
        d["id"] = str(d.pop("_id"))
        d["registration_date"] = _as_utc(d["registration_date"])
        return Registration.model_validate(d)


class SqlRegistrationStore(RegistrationStore):
    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._sessions = sessionmaker(bind=engine, expire_on_commit=False)

    async def prepare(self) -> None:
        await run_in_threadpool(Base.metadata.create_all, self._engine)

    async def insert(self, record: NewRegistration) -> Registration:
        try:
            return await run_in_threadpool(self._insert, record)
        except SQLAlchemyError as e:
            logger.error("SQL insert failed: %s", e)
            raise StoreError("insert") from e

    async def select_all(self) -> list[Registration]:
        try:
            return await run_in_threadpool(self._select_all)
        except (SQLAlchemyError, ValidationError) as e:
            logger.error("SQL select failed: %s", e)
            raise StoreError("select") from e

    def _insert(self, record: NewRegistration) -> Registration:
        with self._sessions() as db:
            row = RegistrationRow(**record.model_dump(), registration_date=now_utc())
            db.add(row)
            db.commit()
            db.refresh(row)
            return self._from_row(row)

    def _select_all(self) -> list[Registration]:
        stmt = select(RegistrationRow).order_by(
            RegistrationRow.registration_date.desc(), RegistrationRow.id.desc()
        )
        with self._sessions() as db:
            return [self._from_row(row) for row in db.scalars(stmt)]

    @staticmethod
    def _from_row(row: RegistrationRow) -> Registration:
        return Registration(
            id=str(row.id),
            name=row.name,
            email=row.email,
            phone=row.phone,
            college=row.college,
            roll_number=row.roll_number,
            section=row.section,
            selected_events=row.selected_events,
            total_amount=row.total_amount,
            registration_date=_as_utc(row.registration_date),
        )


def build_store() -> RegistrationStore:
    if config.STORE_BACKEND == "sql":
        logger.info("Using SQL registration store")
        return SqlRegistrationStore(sql_engine())
    logger.info("Using Mongo registration store (%s)", config.DB_NAME)
    return MongoRegistrationStore(mongo_collection())
