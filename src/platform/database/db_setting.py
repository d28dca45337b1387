"""
Database configuration entry point

Re-exports the SQLAlchemy engine/session helpers from orm_db_setting and the
column types shared by the ORM models.
"""

from src.platform.database.column_types import UtcDateTime
from src.platform.database.orm_db_setting import (
    Base,
    Database,
    create_db_and_tables,
    dispose_engines,
    get_engine,
    get_session_maker,
)

__all__ = [
    'Base',
    'Database',
    'UtcDateTime',
    'create_db_and_tables',
    'dispose_engines',
    'get_engine',
    'get_session_maker',
]
