# garage/utils/db_errors.py
"""Classify storage errors by Postgres SQLSTATE."""

from typing import Optional
from sqlalchemy.exc import SQLAlchemyError

UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"
CHECK_VIOLATION = "23514"
NOT_NULL_VIOLATION = "23502"


def sqlstate(exc: SQLAlchemyError) -> Optional[str]:
    orig = getattr(exc, "orig", None)
    return getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)


def is_unique_violation(exc: SQLAlchemyError) -> bool:
    if sqlstate(exc) == UNIQUE_VIOLATION:
        return True
    # sqlite3 carries no SQLSTATE, only the message
    return "UNIQUE constraint failed" in str(getattr(exc, "orig", ""))
