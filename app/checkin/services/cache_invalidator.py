"""
Dashboard cache invalidation.

Marks the user's cached dashboard aggregates as stale. Best effort: a
failed write is logged and never reaches the caller.
"""

import logging

from app.checkin.services.stores import DashboardCacheStore

logger = logging.getLogger(__name__)


class CacheInvalidator:
    """Writes dashboard_cache markers through the administrative connection."""

    def __init__(self, store: DashboardCacheStore):
        self._store = store

    async def invalidate(self, user_id: str) -> bool:
        """
        Mark the user's dashboard cache as invalidated now.

        Returns:
            True if the marker was written
        """
        try:
            await self._store.mark_invalidated(user_id)
        except Exception as e:
            logger.warning(f"Dashboard cache invalidation failed for user {user_id}: {e}")
            return False
        return True
