"""
Check-in FastAPI Application

Main entry point for the daily check-in ingestion API.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Common library imports
from common.database import MongoDB
from common.utils import APIException, error_response, success_response

# App-specific imports
from app.config import settings
from app.checkin.indexes import ensure_checkin_collections
from app.routers import checkin_router
from app.dependencies import init_all_services

logging.basicConfig(level=logging.DEBUG if settings.DEBUG else logging.INFO)
logger = logging.getLogger(__name__)


# =============================================================================
# Database Instances
# =============================================================================
# Caller-scoped credential: check-in records, profiles, sessions
user_db = MongoDB(name="user")

# Administrative credential: daily entries, dashboard cache
admin_db = MongoDB(name="admin")


# =============================================================================
# Application Lifespan
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Connects both databases, prepares the check-in collections and
    initializes services.
    """
    logger.info("Starting check-in API...")

    await user_db.connect(
        uri=settings.MONGODB_URI,
        database_name=settings.MONGODB_DATABASE,
    )
    await admin_db.connect(
        uri=settings.get_admin_uri(),
        database_name=settings.get_admin_database(),
    )

    if settings.ENSURE_COLLECTIONS_ON_STARTUP:
        await ensure_checkin_collections(user_db.db, admin_db.db)

    init_all_services(
        user_db=user_db.db,
        admin_db=admin_db.db,
        default_timezone=settings.DEFAULT_TIMEZONE,
    )
    logger.info("Check-in API started")

    yield

    logger.info("Shutting down check-in API...")
    await user_db.disconnect()
    await admin_db.disconnect()


# =============================================================================
# FastAPI Application
# =============================================================================
app = FastAPI(
    title="Check-in API",
    description="Daily check-in ingestion: daily entries, check-in records, streaks",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.is_development() else None,
    redoc_url="/redoc" if settings.is_development() else None,
)

# =============================================================================
# CORS Middleware
# =============================================================================
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Error Handlers
# =============================================================================
@app.exception_handler(APIException)
async def api_exception_handler(request: Request, exc: APIException):
    logger.info(f"{request.method} {request.url.path} -> {exc.status_code} {exc.code}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(exc.message),
        headers=exc.headers,
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content=error_response(str(exc) or "Failed"))


# =============================================================================
# Include Routers (all under /api prefix)
# =============================================================================
API_PREFIX = "/api"

app.include_router(checkin_router, prefix=API_PREFIX, tags=["Check-in"])


# =============================================================================
# Health Check Endpoint
# =============================================================================
@app.get("/health", tags=["Health"])
async def health():
    """
    Health check endpoint.

    Returns the status of the API and both database connections.
    """
    return success_response(
        status="ok",
        version="1.0.0",
        database=user_db.is_connected,
        admin_database=admin_db.is_connected,
    )


# =============================================================================
# Run with Uvicorn
# =============================================================================
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development(),
    )
