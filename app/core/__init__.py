"""Core app configuration, database and error types."""

from app.core.config import get_settings, settings
from app.core.database import get_db
from app.core.errors import CallableError, ErrorKind

__all__ = ["get_settings", "settings", "get_db", "CallableError", "ErrorKind"]
