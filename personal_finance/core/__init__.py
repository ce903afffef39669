# Personal Finance Core
from personal_finance.core.config import get_settings, settings
from personal_finance.core.database import (
    Base,
    async_session_maker,
    check_db_connection,
    engine,
    get_db,
)
from personal_finance.core.logging import setup_logging

__all__ = [
    "settings",
    "get_settings",
    "setup_logging",
    "Base",
    "engine",
    "async_session_maker",
    "get_db",
    "check_db_connection",
]
