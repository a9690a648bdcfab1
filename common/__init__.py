"""
Common library for reusable infrastructure components.

- database: Async MongoDB connection manager (Motor)
- utils: Standard responses and API exceptions
- config: Base settings class
"""

from common.database import MongoDB, mask_uri
from common.utils import (
    success_response,
    error_response,
    APIException,
    BadRequestException,
    UnauthorizedException,
    InternalServerException,
)
from common.config import BaseAppSettings

__all__ = [
    # Database
    "MongoDB",
    "mask_uri",
    # Utils
    "success_response",
    "error_response",
    "APIException",
    "BadRequestException",
    "UnauthorizedException",
    "InternalServerException",
    # Config
    "BaseAppSettings",
]
