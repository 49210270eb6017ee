# taskapi/config.py
"""Environment-driven settings for the task service."""

import os
from pathlib import Path
from urllib.parse import quote_plus

from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "")
DB_HOST = os.getenv("DB_HOST", "")
DB_USER = os.getenv("DB_USER", "root")
DB_PASS = os.getenv("DB_PASS", "")
DB_NAME = os.getenv("DB_NAME", "tasks")
DB_PORT = int(os.getenv("DB_PORT", "3306"))

SQLITE_PATH = Path(__file__).parent / "tasks.db"

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))

CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")
CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH"]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def _flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes", "on")


SCHEMA_INIT_STRICT = _flag("SCHEMA_INIT_STRICT")
SQL_ECHO = _flag("SQL_ECHO")


def database_url() -> str:
    """Resolve the SQLAlchemy URL.

    DATABASE_URL wins outright. Otherwise a MySQL URL is assembled from the
    DB_* variables when DB_HOST is set, and a local SQLite file is used when
    it is not.
    """
    if DATABASE_URL:
        return DATABASE_URL
    if DB_HOST:
        return (
            f"mysql+pymysql://{DB_USER}:{quote_plus(DB_PASS)}"
            f"@{DB_HOST}:{DB_PORT}/{DB_NAME}"
        )
    return f"sqlite:///{SQLITE_PATH}"
