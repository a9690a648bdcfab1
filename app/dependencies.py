"""
FastAPI dependencies for the check-in API.

Services are created once at startup by ``init_all_services`` and handed
to routes through the getters below. The pipeline receives both database
handles explicitly: daily entries and the dashboard cache use the
administrative connection, everything else the user-scoped one.
"""

from typing import Annotated, Optional

from fastapi import Depends, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.auth.services.session_manager import SessionManager
from app.middleware.auth import AuthMiddleware
from app.checkin.services.stores import (
    CheckInStore,
    DailyEntryStore,
    DashboardCacheStore,
    ProfileStore,
)
from app.checkin.services.daily_entry_writer import DailyEntryWriter
from app.checkin.services.checkin_record_writer import CheckInRecordWriter
from app.checkin.services.cache_invalidator import CacheInvalidator
from app.pipelines.checkin import CheckInOrchestrator


# ─────────────────────────────────────────────────────────────────
# Global service instances
# ─────────────────────────────────────────────────────────────────

# Auth
_session_manager: Optional[SessionManager] = None
_auth_middleware: Optional[AuthMiddleware] = None

# Check-in
_checkin_store: Optional[CheckInStore] = None
_profile_store: Optional[ProfileStore] = None
_checkin_orchestrator: Optional[CheckInOrchestrator] = None
_default_timezone: str = "UTC"


# ─────────────────────────────────────────────────────────────────
# Initialization functions
# ─────────────────────────────────────────────────────────────────

def init_auth_services(db: AsyncIOMotorDatabase) -> None:
    """Initialize auth services."""
    global _session_manager, _auth_middleware

    _session_manager = SessionManager(db=db)
    _auth_middleware = AuthMiddleware(session_manager=_session_manager)


def init_checkin_services(
    user_db: AsyncIOMotorDatabase,
    admin_db: AsyncIOMotorDatabase,
    default_timezone: str = "UTC",
) -> None:
    """
    Initialize check-in services.

    Args:
        user_db: Database opened with the caller-scoped credential
        admin_db: Database opened with the administrative credential
        default_timezone: Day boundary for profiles without a timezone
    """
    global _checkin_store, _profile_store, _checkin_orchestrator, _default_timezone

    _checkin_store = CheckInStore(user_db)
    _profile_store = ProfileStore(user_db)
    _default_timezone = default_timezone

    _checkin_orchestrator = CheckInOrchestrator(
        daily_entry_writer=DailyEntryWriter(DailyEntryStore(admin_db)),
        checkin_record_writer=CheckInRecordWriter(_checkin_store),
        profile_store=_profile_store,
        cache_invalidator=CacheInvalidator(DashboardCacheStore(admin_db)),
        default_timezone=default_timezone,
    )


def init_all_services(
    user_db: AsyncIOMotorDatabase,
    admin_db: AsyncIOMotorDatabase,
    default_timezone: str = "UTC",
) -> None:
    """
    Initialize all services.

    Called once at application startup.
    """
    init_auth_services(user_db)
    init_checkin_services(user_db, admin_db, default_timezone)


# ─────────────────────────────────────────────────────────────────
# Auth getters
# ─────────────────────────────────────────────────────────────────

def get_auth_middleware() -> AuthMiddleware:
    """Get auth middleware instance."""
    if _auth_middleware is None:
        raise RuntimeError("Auth services not initialized. Call init_auth_services first.")
    return _auth_middleware


async def require_auth(
    request: Request,
    auth_middleware: Annotated[AuthMiddleware, Depends(get_auth_middleware)]
) -> dict:
    """Dependency that requires authentication."""
    return await auth_middleware.require_auth(request)


# ─────────────────────────────────────────────────────────────────
# Check-in getters
# ─────────────────────────────────────────────────────────────────

def get_checkin_orchestrator() -> CheckInOrchestrator:
    """Get check-in orchestrator instance."""
    if _checkin_orchestrator is None:
        raise RuntimeError("Check-in services not initialized. Call init_checkin_services first.")
    return _checkin_orchestrator


def get_checkin_store() -> CheckInStore:
    """Get check-in record store instance."""
    if _checkin_store is None:
        raise RuntimeError("Check-in services not initialized. Call init_checkin_services first.")
    return _checkin_store


def get_profile_store() -> ProfileStore:
    """Get profile store instance."""
    if _profile_store is None:
        raise RuntimeError("Check-in services not initialized. Call init_checkin_services first.")
    return _profile_store


def get_default_timezone() -> str:
    """Get the configured fallback timezone."""
    return _default_timezone
