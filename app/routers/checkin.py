"""
FastAPI router for Check-in system endpoints.

The submit endpoint reads the raw body itself: malformed JSON is treated
as an empty object and validation happens in the pipeline.
"""

import json
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.dependencies import (
    require_auth,
    get_checkin_orchestrator,
    get_checkin_store,
    get_profile_store,
    get_default_timezone,
)
from app.checkin.errors import MissingRequiredField, PersistenceError
from app.checkin.models import (
    CheckInSubmission,
    StreakResponse,
    SubmitCheckInResponse,
    TodayCheckInResponse,
)
from app.checkin.services.stores import CheckInStore, ProfileStore
from app.pipelines import checkin as pipelines
from app.pipelines.checkin import CheckInOrchestrator
from common.utils.exceptions import BadRequestException, InternalServerException

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/checkin", tags=["checkin"])


async def _read_body(request: Request):
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return {}


@router.post("", response_model=SubmitCheckInResponse)
async def submit_checkin(
    request: Request,
    user: Annotated[dict, Depends(require_auth)],
    orchestrator: Annotated[CheckInOrchestrator, Depends(get_checkin_orchestrator)],
):
    """
    Submit a daily check-in.

    Creates or updates today's records and returns any micro-wins.
    """
    submission = CheckInSubmission.from_body(await _read_body(request))

    try:
        result = await orchestrator.submit(str(user["_id"]), submission)
    except MissingRequiredField as e:
        raise BadRequestException(e.message, code="MISSING_REQUIRED_FIELDS")
    except PersistenceError as e:
        raise InternalServerException(e.message, code="PERSISTENCE_ERROR")

    return SubmitCheckInResponse(**result)


@router.get("/today", response_model=TodayCheckInResponse)
async def get_today_checkin(
    user: Annotated[dict, Depends(require_auth)],
    checkin_store: Annotated[CheckInStore, Depends(get_checkin_store)],
    profile_store: Annotated[ProfileStore, Depends(get_profile_store)],
    default_timezone: Annotated[str, Depends(get_default_timezone)],
):
    """
    Get today's check-in status.

    Returns whether user has checked in today and the canonical record if so.
    """
    try:
        result = await pipelines.get_today_checkin_pipeline(
            checkin_store=checkin_store,
            profile_store=profile_store,
            user_id=str(user["_id"]),
            default_timezone=default_timezone,
        )
    except PersistenceError as e:
        raise InternalServerException(e.message, code="PERSISTENCE_ERROR")

    return TodayCheckInResponse(**result)


@router.get("/streak", response_model=StreakResponse)
async def get_streak(
    user: Annotated[dict, Depends(require_auth)],
    profile_store: Annotated[ProfileStore, Depends(get_profile_store)],
    default_timezone: Annotated[str, Depends(get_default_timezone)],
):
    """
    Get current streak count.

    Returns number of consecutive days user has checked in.
    """
    try:
        result = await pipelines.get_streak_pipeline(
            profile_store=profile_store,
            user_id=str(user["_id"]),
            default_timezone=default_timezone,
        )
    except PersistenceError as e:
        raise InternalServerException(e.message, code="PERSISTENCE_ERROR")

    return StreakResponse(**result)
