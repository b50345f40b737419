"""Classification of database driver errors."""

from sqlalchemy.exc import IntegrityError

UNIQUE_VIOLATION = "23505"


def is_unique_violation(error: IntegrityError) -> bool:
    """True when ``error`` comes from a unique constraint, not a FK or NOT NULL one."""
    orig = error.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate is not None:
        return sqlstate == UNIQUE_VIOLATION
    # SQLite reports no SQLSTATE
    return "UNIQUE constraint failed" in str(orig)
