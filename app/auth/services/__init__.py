"""Auth services."""

from app.auth.services.token_hasher import TokenHasher
from app.auth.services.session_manager import SessionManager

__all__ = ["TokenHasher", "SessionManager"]
