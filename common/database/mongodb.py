"""
Generic MongoDB connection manager using Motor.

This module provides async MongoDB connectivity that works with any database.
Each instance owns one client, so services that need different credentials
(for example a per-user scope and an administrative scope) create one
instance per credential.

Example:
    from common.database import MongoDB

    user_db = MongoDB()
    await user_db.connect(uri="mongodb://app@localhost:27017", database_name="checkins")

    admin_db = MongoDB()
    await admin_db.connect(uri="mongodb://admin@localhost:27017", database_name="checkins")
"""

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

logger = logging.getLogger(__name__)


def mask_uri(uri: str) -> str:
    """Strip credentials from a connection string for logging."""
    return uri.split("@")[-1] if "@" in uri else uri


class MongoDB:
    """Generic MongoDB connection manager - works with any database."""

    def __init__(self, name: str = "main"):
        self._name = name
        self._client: Optional[AsyncIOMotorClient] = None
        self._database_name: Optional[str] = None
        self._connected: bool = False

    async def connect(self, uri: str, database_name: str) -> None:
        """
        Connect to MongoDB and verify the server is reachable.

        Args:
            uri: MongoDB connection string
            database_name: Name of the database to use
        """
        logger.info(f"Connecting to MongoDB ({self._name}): {mask_uri(uri)}")
        logger.debug(f"Database name: {database_name}")

        try:
            self._client = AsyncIOMotorClient(uri)
            self._database_name = database_name
            await self._client.admin.command("ping")
            self._connected = True
            logger.info(f"Successfully connected to MongoDB database ({self._name}): {database_name}")
        except Exception as e:
            logger.error(f"Failed to connect to MongoDB ({self._name}): {e}")
            raise

    async def disconnect(self) -> None:
        """Close the MongoDB connection."""
        if self._client:
            logger.info(f"Disconnecting from MongoDB database ({self._name}): {self._database_name}")
            self._client.close()
            self._client = None
            self._database_name = None
            self._connected = False
            logger.debug("MongoDB connection closed")

    @property
    def is_connected(self) -> bool:
        """Check if database is connected."""
        return self._connected

    @property
    def db(self) -> AsyncIOMotorDatabase:
        """Get the underlying Motor database instance."""
        if not self._client or not self._database_name:
            raise RuntimeError("Database not connected")
        return self._client[self._database_name]
