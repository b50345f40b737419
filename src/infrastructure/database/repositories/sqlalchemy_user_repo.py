"""SQLAlchemy implementation of User repository."""

from typing import Any

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from domain.entities.user import AuthorSummary, User, UserRole, UserStatus
from infrastructure.database.models import ProfileModel, UserModel


def select_with_author(model: Any, author_fk: InstrumentedAttribute[int]) -> Select[Any]:
    """Select ``model`` rows together with the author's email, name and avatar."""
    return (
        select(model, UserModel.email, ProfileModel.full_name, ProfileModel.profile_image_url)
        .join(UserModel, UserModel.id == author_fk)
        .outerjoin(ProfileModel, ProfileModel.user_id == UserModel.id)
    )


def author_from_row(user_id: int, row: Any) -> AuthorSummary:
    """Build an AuthorSummary from a row produced by ``select_with_author``."""
    return AuthorSummary(
        user_id=user_id,
        email=row.email,
        full_name=row.full_name,
        avatar_url=row.profile_image_url,
    )


class SQLAlchemyUserRepository:
    """SQLAlchemy implementation of IUserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: int) -> User | None:
        """Get a user by ID."""
        model = await self._session.get(UserModel, id)
        return self._to_entity(model) if model else None

    async def get_by_email(self, email: str) -> User | None:
        """Get a user by email."""
        stmt = select(UserModel).where(UserModel.email == email)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def create(self, user: User) -> User:
        """Create a new user."""
        model = UserModel(
            email=user.email,
            password_hash=user.password_hash,
            role=user.role.value,
            status=user.status.value,
            phone=user.phone,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def get_author(self, id: int) -> AuthorSummary | None:
        """Get the public name/avatar of a user."""
        stmt = (
            select(UserModel.email, ProfileModel.full_name, ProfileModel.profile_image_url)
            .outerjoin(ProfileModel, ProfileModel.user_id == UserModel.id)
            .where(UserModel.id == id)
        )
        row = (await self._session.execute(stmt)).first()
        return author_from_row(id, row) if row else None

    def _to_entity(self, model: UserModel) -> User:
        """Convert ORM model to domain entity."""
        return User(
            id=model.id,
            email=model.email,
            password_hash=model.password_hash,
            role=UserRole(model.role),
            status=UserStatus(model.status),
            phone=model.phone,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
