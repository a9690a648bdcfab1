"""
Session lookup for user authentication.

Sessions live in the embedded ``sessions`` array of the user document and
are created by the account service; this API only validates them.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, Tuple

from motor.motor_asyncio import AsyncIOMotorDatabase

logger = logging.getLogger(__name__)


class SessionManager:
    """
    Resolves session token hashes to users.
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        """
        Initialize SessionManager.

        Args:
            db: User-scoped MongoDB database
        """
        self._users_collection = db["users"]

    async def validate_session(
        self,
        token_hash: str
    ) -> Optional[Tuple[dict, dict]]:
        """
        Find user and session by token hash.

        Args:
            token_hash: SHA-256 hash of session token

        Returns:
            tuple of (user_dict, session_dict) if valid, None if not found or expired
        """
        now = datetime.now(timezone.utc)

        user = await self._users_collection.find_one({
            "sessions": {
                "$elemMatch": {
                    "tokenHash": token_hash,
                    "expiresAt": {"$gt": now}
                }
            }
        })

        if not user:
            return None

        session = None
        for s in user.get("sessions", []):
            if s.get("tokenHash") == token_hash:
                session = s
                break

        return user, session
