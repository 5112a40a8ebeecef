# database.py
import logging
from typing import Optional

from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from config import DEFAULT_DB_NAME

logger = logging.getLogger(__name__)


class MongoConnection:
    """Owns the process-wide motor client.

    Opened once on application startup and closed on shutdown. The client keeps
    its own connection pool, so handlers share it through ``get_db``.
    """

    def __init__(self, uri: str, db_name: Optional[str] = None):
        self.uri = uri
        self.db_name = db_name
        self.client: Optional[AsyncIOMotorClient] = None
        self._db: Optional[AsyncIOMotorDatabase] = None

    def connect(self) -> AsyncIOMotorDatabase:
        if self.client is None:
            self.client = AsyncIOMotorClient(self.uri)
            if self.db_name:
                self._db = self.client[self.db_name]
            else:
                self._db = self.client.get_default_database(DEFAULT_DB_NAME)
            logger.info(f"Using MongoDB database: {self._db.name}")
        return self._db

    @property
    def db(self) -> AsyncIOMotorDatabase:
        if self._db is None:
            raise RuntimeError("MongoConnection.connect() has not been called")
        return self._db

    async def init_indexes(self):
        await self.db.mentors.create_index("id", unique=True)
        await self.db.students.create_index("id", unique=True)

    def close(self):
        if self.client is not None:
            self.client.close()
            logger.info("Closed MongoDB connection")
        self.client = None
        self._db = None


def get_db(request: Request) -> AsyncIOMotorDatabase:
    return request.app.state.mongo.db
