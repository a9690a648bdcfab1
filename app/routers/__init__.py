"""
Check-in API Routers.
"""

from app.routers.checkin import router as checkin_router

__all__ = ["checkin_router"]
