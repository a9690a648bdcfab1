"""Request middleware."""

from app.middleware.auth import AuthMiddleware

__all__ = ["AuthMiddleware"]
