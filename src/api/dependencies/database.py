"""Database dependencies shared by all routers."""

from typing import Callable

from fastapi import Depends, Request

from infrastructure.database.session import Database
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork

UowFactory = Callable[[], SQLAlchemyUnitOfWork]


def get_database(request: Request) -> Database:
    """The Database handle created at application startup."""
    database = getattr(request.app.state, "database", None)
    if database is None:
        raise RuntimeError("Database not initialized. Run the app lifespan or pass one to create_app().")
    return database  # type: ignore[no-any-return]


def get_uow_factory(database: Database = Depends(get_database)) -> UowFactory:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(database.session_factory)

    return factory
