"""
Session ownership

The timer has no authentication: a request belongs to the user named by the
optional X-User-Id header, or to the configured default user.
"""
import logging
from typing import Optional

from fastapi import Header, HTTPException

from app.config import DEFAULT_USER_ID

logger = logging.getLogger(__name__)


async def get_current_user_id(
    x_user_id: Optional[str] = Header(None)
) -> int:
    """
    FastAPI dependency resolving the owner of the timer session.
    Returns the user ID from the X-User-Id header, falling back to DEFAULT_USER_ID.
    """
    if x_user_id is None or x_user_id == "":
        return DEFAULT_USER_ID

    try:
        user_id = int(x_user_id)
    except ValueError:
        raise HTTPException(
            status_code=400,
            detail="Invalid X-User-Id header. Expected an integer"
        )

    if user_id < 0:
        raise HTTPException(
            status_code=400,
            detail="Invalid X-User-Id header. Expected a non-negative integer"
        )

    return user_id
