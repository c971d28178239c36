"""Business logic for timer sessions"""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.features.timer.domain import (
    TimerSession,
    TimerSessionCreate,
    TimerSessionUpdate,
    TimerState,
)
from app.features.timer.repository import TimerSessionRepository

logger = logging.getLogger(__name__)


class TimerSessionService:
    """Service layer for the single-active-session store"""

    def __init__(self, db: AsyncSession):
        self.repository = TimerSessionRepository(db)

    async def get_active(self, user_id: int) -> Optional[TimerSession]:
        return await self.repository.get_active_for_user(user_id)

    async def start(self, user_id: int, data: TimerSessionCreate) -> TimerSession:
        """
        Create a new session, retiring the user's previous one.

        Business rules:
        - A user owns at most one session
        - The new session is independent of any prior session's values
        """
        return await self.repository.create(user_id, data)

    async def update(
        self,
        user_id: int,
        data: TimerSessionUpdate
    ) -> Optional[TimerSession]:
        """
        Merge a partial update into the user's active session.

        Returns:
            The updated session, or None if there is no active session

        Raises:
            pydantic.ValidationError: If the merged counters exceed the half budget
        """
        current = await self.repository.get_active_for_user(user_id)
        if current is None:
            return None

        # Validate the merged result before touching the row
        merged = current.to_state().model_dump()
        merged.update(data.model_dump(exclude_unset=True))
        TimerState(**merged)

        return await self.repository.update_active(user_id, data)

    async def reset(self, user_id: int) -> None:
        """Delete the user's active session; no-op when there is none"""
        removed = await self.repository.clear_for_user(user_id)
        if removed:
            logger.info(f"Timer session reset for user {user_id}")
