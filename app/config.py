import os
from dotenv import load_dotenv

load_dotenv(dotenv_path=".env")

# Database
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./timer.db")

# Connection pool configuration (ignored for SQLite)
DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "5"))
DB_MAX_OVERFLOW = int(os.getenv("DB_MAX_OVERFLOW", "10"))
DB_POOL_TIMEOUT = int(os.getenv("DB_POOL_TIMEOUT", "30"))
DB_POOL_RECYCLE = int(os.getenv("DB_POOL_RECYCLE", "3600"))

# Owner of the timer session when the request carries no X-User-Id header
DEFAULT_USER_ID = int(os.getenv("DEFAULT_USER_ID", "1"))

# Client driver
TIMER_API_URL = os.getenv("TIMER_API_URL", "http://localhost:8000")
TIMER_API_TIMEOUT_SECONDS = float(os.getenv("TIMER_API_TIMEOUT_SECONDS", "10"))
TICK_INTERVAL_SECONDS = float(os.getenv("TICK_INTERVAL_SECONDS", "0.1"))
SYNC_INTERVAL_SECONDS = float(os.getenv("SYNC_INTERVAL_SECONDS", "10"))
