"""SQLAlchemy repository for timer sessions"""

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

# SQLAlchemy ORM model
from app.db.models.timer_session import TimerSession as TimerSessionORM

# Pydantic domain models (feature-local)
from app.features.timer.domain import (
    TimerMode,
    TimerSession,
    TimerSessionCreate,
    TimerSessionUpdate,
)

logger = logging.getLogger(__name__)


def _to_domain(record: TimerSessionORM) -> TimerSession:
    """Convert an ORM row to the domain model"""
    return TimerSession(
        id=record.id,
        user_id=record.user_id,
        total_seconds=record.total_seconds,
        work_seconds_remaining=record.work_seconds_remaining,
        play_seconds_remaining=record.play_seconds_remaining,
        current_mode=TimerMode(record.current_mode),
        is_running=record.is_running,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


class TimerSessionRepository:
    """Repository for timer session operations using SQLAlchemy"""

    def __init__(self, db: AsyncSession):
        """
        Initialize the repository with a database session.

        Args:
            db: SQLAlchemy async database session
        """
        self.db = db

    async def _get_active_record(self, user_id: int) -> Optional[TimerSessionORM]:
        stmt = (
            select(TimerSessionORM)
            .where(TimerSessionORM.user_id == user_id)
            .order_by(TimerSessionORM.id.desc())
            .limit(1)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_active_for_user(self, user_id: int) -> Optional[TimerSession]:
        """
        Get the active timer session of a user.

        Returns:
            The session, or None if the user has none
        """
        record = await self._get_active_record(user_id)
        return _to_domain(record) if record else None

    async def create(self, user_id: int, data: TimerSessionCreate) -> TimerSession:
        """
        Create a session for the user after deleting any session they already own.

        Both steps run in one transaction.
        """
        await self.db.execute(
            delete(TimerSessionORM).where(TimerSessionORM.user_id == user_id)
        )
        record = TimerSessionORM(
            user_id=user_id,
            total_seconds=data.total_seconds,
            work_seconds_remaining=data.work_seconds_remaining,
            play_seconds_remaining=data.play_seconds_remaining,
            current_mode=data.current_mode.value,
            is_running=data.is_running,
        )
        self.db.add(record)
        await self.db.commit()
        await self.db.refresh(record)

        logger.info(f"Timer session {record.id} created for user {user_id} ({record.total_seconds}s)")
        return _to_domain(record)

    async def update_active(
        self,
        user_id: int,
        data: TimerSessionUpdate
    ) -> Optional[TimerSession]:
        """
        Merge the set fields of ``data`` into the user's active session.

        Returns:
            The updated session, or None if the user has no active session
        """
        record = await self._get_active_record(user_id)
        if record is None:
            return None

        changes = data.model_dump(exclude_unset=True)
        for key, value in changes.items():
            if isinstance(value, TimerMode):
                value = value.value
            setattr(record, key, value)
        record.updated_at = datetime.now(timezone.utc)

        await self.db.commit()
        await self.db.refresh(record)
        return _to_domain(record)

    async def clear_for_user(self, user_id: int) -> int:
        """
        Delete every session the user owns.

        Returns:
            Number of rows removed (0 when there was nothing to delete)
        """
        result = await self.db.execute(
            delete(TimerSessionORM).where(TimerSessionORM.user_id == user_id)
        )
        await self.db.commit()
        return result.rowcount or 0
