"""
Standard API response helpers.

Provides consistent response formatting for success and error cases.

Example:
    from common.utils import success_response, error_response

    @app.get("/checkin/streak")
    async def get_streak():
        return success_response(streak=4)

    JSONResponse(status_code=400, content=error_response("Missing required fields"))
"""

from typing import Any, Dict


def success_response(**fields: Any) -> Dict[str, Any]:
    """
    Create a standard success response.

    Fields are merged into the top level of the body next to
    ``success: True``; clients read them directly (``body.id``,
    ``body.micro_wins``) rather than from a nested envelope.

    Returns:
        Dictionary with success=True and the given fields
    """
    response: Dict[str, Any] = {"success": True}
    response.update(fields)
    return response


def error_response(message: str) -> Dict[str, Any]:
    """
    Create a standard error response.

    Args:
        message: Human-readable error message

    Returns:
        Dictionary with the error message under ``error``
    """
    return {"error": message}
