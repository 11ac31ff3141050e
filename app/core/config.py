# /reporting-backend/app/core/config.py

"""
Application configuration.

Every setting is read from the environment. A local `.env` file is loaded
first so development machines do not need exported variables. Hosted
Postgres providers still hand out URLs that start with `postgres://`, which
SQLAlchemy no longer accepts, so the prefix is normalised here.
"""

import os
from typing import List

from dotenv import load_dotenv


class Settings:
    """Container for all runtime settings, resolved once at import time."""

    load_dotenv()

    _db_url = os.getenv("DATABASE_URL", "")
    if _db_url.startswith("postgres://"):
        _db_url = _db_url.replace("postgres://", "postgresql://", 1)
    DATABASE_URL: str = _db_url or "sqlite:///./reports.db"

    # Tokens are issued by the authentication service; this backend only verifies them.
    JWT_SECRET: str = os.getenv("JWT_SECRET", "dev-secret")
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    CORS_ORIGINS: List[str] = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "*").split(",")
        if origin.strip()
    ]


settings = Settings()
