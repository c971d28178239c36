"""SQLAlchemy ORM model for timer_sessions table"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Integer, String

from app.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimerSession(Base):
    """
    SQLAlchemy ORM model for the timer_sessions table.
    One row per active work/play session; a user owns at most one row.
    """
    __tablename__ = "timer_sessions"
    # Never reuse the id of a retired session
    __table_args__ = {"sqlite_autoincrement": True}

    # Primary key
    id = Column(Integer, primary_key=True, index=True)

    # Ownership key (opaque, no users table)
    user_id = Column(Integer, nullable=False, index=True)

    # Budgets in whole seconds
    total_seconds = Column(Integer, nullable=False)
    work_seconds_remaining = Column(Integer, nullable=False)
    play_seconds_remaining = Column(Integer, nullable=False)

    # "work" or "play" (String instead of Enum, matching the Pydantic model values)
    current_mode = Column(String, nullable=False)
    is_running = Column(Boolean, nullable=False, default=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    def __repr__(self) -> str:
        return (
            f"<TimerSession(id={self.id}, user_id={self.user_id}, "
            f"mode='{self.current_mode}', running={self.is_running})>"
        )
