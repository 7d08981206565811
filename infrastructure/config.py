import logging
import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _database_url_from_parts() -> Optional[str]:
    """Build a PostgreSQL URL from DB_* variables when all of them are set"""
    parts = [os.getenv(name) for name in ("DB_USER", "DB_PASSWORD", "DB_HOST", "DB_PORT", "DB_NAME")]
    if not all(parts):
        return None
    user, password, host, port, name = parts
    return f"postgresql+asyncpg://{user}:{password}@{host}:{port}/{name}"


# Unset means the in-memory store is used
DATABASE_URL = os.getenv("DATABASE_URL") or _database_url_from_parts()
SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() in ("1", "true", "yes")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

SERVER_HOST = os.getenv("SERVER_HOST", "0.0.0.0")
SERVER_PORT = int(os.getenv("SERVER_PORT", "8000"))


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
