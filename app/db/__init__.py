"""Database package"""

from app.db.base import Base
from app.db.session import configure_engine, get_db, init_db

__all__ = ["Base", "configure_engine", "get_db", "init_db"]
