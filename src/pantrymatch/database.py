"""Database configuration and session management."""

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase

from pantrymatch.config import settings

_SQL_ECHO = settings.is_development and settings.log_level.upper() == "DEBUG"


class Base(DeclarativeBase):
    """Base class for all database models."""

    pass


# Sync engine for batch jobs; the engine itself never suspends
sync_engine = create_engine(settings.database_url, echo=_SQL_ECHO)
