"""
Authentication middleware for protected routes.

Validates session tokens and attaches the user to the request.
"""

import logging
from typing import Optional

from fastapi import Request

from common.utils.exceptions import UnauthorizedException
from app.auth.services.session_manager import SessionManager
from app.auth.services.token_hasher import TokenHasher

logger = logging.getLogger(__name__)


class AuthMiddleware:
    """
    Middleware that validates session and attaches user to request.
    """

    def __init__(self, session_manager: SessionManager):
        """
        Initialize AuthMiddleware.

        Args:
            session_manager: For session validation
        """
        self._session_manager = session_manager

    async def require_auth(self, request: Request) -> dict:
        """
        Validate request is authenticated.

        Args:
            request: HTTP request object

        Returns:
            User dict attached to request

        Raises:
            UnauthorizedException: No header, unknown or expired session

        Side Effects:
            - Attaches user to request.state.user
        """
        token = self._extract_token(request)

        if not token:
            raise UnauthorizedException(code="AUTH_REQUIRED")

        result = await self._session_manager.validate_session(TokenHasher.hash_token(token))

        if not result:
            logger.debug("Rejected request with unknown or expired session")
            raise UnauthorizedException(code="INVALID_SESSION")

        user, _ = result
        request.state.user = user

        return user

    def _extract_token(self, request: Request) -> Optional[str]:
        """
        Extract bearer token from Authorization header.

        Expected format: "Authorization: Bearer <token>"
        """
        auth_header = request.headers.get("Authorization")

        if not auth_header:
            return None

        parts = auth_header.split()

        if len(parts) != 2:
            return None

        scheme, token = parts

        if scheme.lower() != "bearer":
            return None

        return token
