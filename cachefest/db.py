from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from sqlalchemy import Engine, create_engine

from . import config


def mongo_collection(
    uri: str = config.MONGO_URI,
    db_name: str = config.DB_NAME,
    name: str = config.MONGO_COLLECTION,
) -> AsyncIOMotorCollection:
    # Motor connects lazily; nothing touches the network here.
    client = AsyncIOMotorClient(uri, tz_aware=True)
    return client[db_name][name]


async def ensure_indexes(registrations: AsyncIOMotorCollection) -> None:
    await registrations.create_index([("registration_date", -1)])
    await registrations.create_index([("email", 1)])


def sql_engine(url: str = config.SQL_DATABASE_URL, **kwargs) -> Engine:
    if url.startswith("sqlite"):
        # sessions run on the thread pool, not the thread that opened them
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    return create_engine(url, **kwargs)
