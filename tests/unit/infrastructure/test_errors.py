"""Unit tests for database error classification."""

import sqlite3
from types import SimpleNamespace

import pytest
from sqlalchemy.exc import IntegrityError

from infrastructure.database.errors import is_unique_violation


def _integrity_error(orig: object) -> IntegrityError:
    return IntegrityError("INSERT INTO community_likes ...", {}, orig)  # type: ignore[arg-type]


class TestIsUniqueViolation:
    def test_sqlite_unique(self) -> None:
        orig = sqlite3.IntegrityError(
            "UNIQUE constraint failed: community_likes.post_id, community_likes.user_id"
        )

        assert is_unique_violation(_integrity_error(orig))

    @pytest.mark.parametrize(
        "message",
        ["FOREIGN KEY constraint failed", "NOT NULL constraint failed: activities.is_active"],
    )
    def test_sqlite_other_constraints(self, message: str) -> None:
        assert not is_unique_violation(_integrity_error(sqlite3.IntegrityError(message)))

    @pytest.mark.parametrize(
        ("sqlstate", "expected"),
        [("23505", True), ("23503", False), ("23502", False)],
    )
    def test_postgres_sqlstate(self, sqlstate: str, expected: bool) -> None:
        orig = SimpleNamespace(sqlstate=sqlstate)

        assert is_unique_violation(_integrity_error(orig)) is expected

    def test_psycopg_pgcode(self) -> None:
        orig = SimpleNamespace(sqlstate=None, pgcode="23503")

        assert not is_unique_violation(_integrity_error(orig))
