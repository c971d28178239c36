"""Timer session API endpoints"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import get_db
from app.middleware.auth import get_current_user_id
from app.features.timer.domain import TimerSession, TimerSessionCreate, TimerSessionUpdate
from app.features.timer.schemas import ValidationErrorResponse, to_field_errors
from app.features.timer.service import TimerSessionService

logger = logging.getLogger(__name__)


router = APIRouter(prefix="/api/timer", tags=["timer"])

NOT_FOUND_DETAIL = "No active timer session found"


@router.get("", response_model=TimerSession)
async def get_timer_session(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """
    Get the active timer session of the user.

    Raises:
        404: The user has no active session
        500: Store failure
    """
    try:
        service = TimerSessionService(db)
        session = await service.get_active(user_id)
    except Exception as e:
        logger.error(f"Error fetching timer session: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch timer session")

    if session is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND_DETAIL)
    return session


@router.post(
    "",
    response_model=TimerSession,
    status_code=201,
    responses={400: {"model": ValidationErrorResponse}},
)
async def create_timer_session(
    request: TimerSessionCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """
    Start a new timer session.

    Any session the user already owns is deleted first, so the user ends up
    with exactly one active session.

    Returns:
        The created session, including its generated id and timestamps
    """
    try:
        service = TimerSessionService(db)
        return await service.start(user_id, request)
    except Exception as e:
        logger.error(f"Error creating timer session: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create timer session")


@router.put(
    "",
    response_model=TimerSession,
    responses={400: {"model": ValidationErrorResponse}},
)
async def update_timer_session(
    request: TimerSessionUpdate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """
    Merge a partial update into the active session and bump updatedAt.

    Raises:
        400: Merged counters would exceed the half budget
        404: The user has no active session
        500: Store failure
    """
    try:
        service = TimerSessionService(db)
        session = await service.update(user_id, request)
    except ValidationError as e:
        body = ValidationErrorResponse(errors=to_field_errors(e.errors()))
        return JSONResponse(status_code=400, content=body.model_dump())
    except Exception as e:
        logger.error(f"Error updating timer session: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update timer session")

    if session is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND_DETAIL)
    return session


@router.delete("", status_code=204)
async def delete_timer_session(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Delete the active session. Idempotent: 204 whether or not one existed."""
    try:
        service = TimerSessionService(db)
        await service.reset(user_id)
    except Exception as e:
        logger.error(f"Error deleting timer session: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to delete timer session")

    return Response(status_code=204)
