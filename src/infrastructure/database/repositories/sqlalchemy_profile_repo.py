"""SQLAlchemy implementation of Profile and Interest repositories."""

from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.profile import EmergencyContact, Profile
from infrastructure.database.models import (
    EmergencyContactModel,
    HealthInfoModel,
    InterestModel,
    ProfileModel,
    UserInterestModel,
)

PROFILE_COLUMNS = frozenset(
    {"nickname", "gender", "date_of_birth", "address", "profile_image_url"}
)


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, user_id: int) -> Profile | None:
        """Get the profile of a user."""
        model = await self._get_model(user_id)
        return self._to_entity(model) if model else None

    async def upsert(self, user_id: int, full_name: str, fields: dict[str, Any]) -> Profile:
        """Create the profile or overwrite only the given columns."""
        unknown = set(fields) - PROFILE_COLUMNS
        if unknown:
            raise ValueError(f"Unknown profile fields: {sorted(unknown)}")

        model = await self._get_model(user_id)
        if model is None:
            model = ProfileModel(user_id=user_id, full_name=full_name, **fields)
            self._session.add(model)
        else:
            model.full_name = full_name
            for name, value in fields.items():
                setattr(model, name, value)

        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, user_id: int) -> bool:
        """Delete the profile row and all child rows of the user."""
        await self._session.execute(delete(HealthInfoModel).where(HealthInfoModel.user_id == user_id))
        await self._session.execute(
            delete(EmergencyContactModel).where(EmergencyContactModel.user_id == user_id)
        )
        await self._session.execute(
            delete(UserInterestModel).where(UserInterestModel.user_id == user_id)
        )
        result = await self._session.execute(
            delete(ProfileModel).where(ProfileModel.user_id == user_id)
        )
        return bool(result.rowcount)

    async def get_health_conditions(self, user_id: int) -> list[str]:
        """Get health condition descriptions, oldest first."""
        stmt = (
            select(HealthInfoModel.condition)
            .where(HealthInfoModel.user_id == user_id)
            .order_by(HealthInfoModel.id)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars())

    async def replace_health_conditions(self, user_id: int, conditions: list[str]) -> None:
        """Delete all health rows of the user, then insert the given set."""
        await self._session.execute(delete(HealthInfoModel).where(HealthInfoModel.user_id == user_id))
        self._session.add_all(
            HealthInfoModel(user_id=user_id, condition=condition) for condition in conditions
        )
        await self._session.flush()

    async def get_emergency_contacts(self, user_id: int) -> list[EmergencyContact]:
        """Get emergency contacts, oldest first."""
        stmt = (
            select(EmergencyContactModel)
            .where(EmergencyContactModel.user_id == user_id)
            .order_by(EmergencyContactModel.id)
        )
        result = await self._session.execute(stmt)
        return [
            EmergencyContact(
                id=model.id,
                user_id=model.user_id,
                name=model.name,
                phone=model.phone,
                relationship=model.relation,
            )
            for model in result.scalars()
        ]

    async def replace_emergency_contacts(
        self, user_id: int, contacts: list[EmergencyContact]
    ) -> None:
        """Delete all contacts of the user, then insert the given set."""
        await self._session.execute(
            delete(EmergencyContactModel).where(EmergencyContactModel.user_id == user_id)
        )
        self._session.add_all(
            EmergencyContactModel(
                user_id=user_id,
                name=contact.name,
                phone=contact.phone,
                relation=contact.relationship,
            )
            for contact in contacts
        )
        await self._session.flush()

    async def get_interest_names(self, user_id: int) -> list[str]:
        """Get the names of the user's interests."""
        stmt = (
            select(InterestModel.name)
            .join(UserInterestModel, UserInterestModel.interest_id == InterestModel.id)
            .where(UserInterestModel.user_id == user_id)
            .order_by(UserInterestModel.id)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars())

    async def clear_interests(self, user_id: int) -> None:
        """Remove all interest links of the user."""
        await self._session.execute(
            delete(UserInterestModel).where(UserInterestModel.user_id == user_id)
        )

    async def add_interest(self, user_id: int, interest_id: int) -> None:
        """Link an interest to the user."""
        self._session.add(UserInterestModel(user_id=user_id, interest_id=interest_id))
        await self._session.flush()

    async def _get_model(self, user_id: int) -> ProfileModel | None:
        stmt = select(ProfileModel).where(ProfileModel.user_id == user_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _to_entity(self, model: ProfileModel) -> Profile:
        """Convert ORM model to domain entity."""
        return Profile(
            id=model.id,
            user_id=model.user_id,
            full_name=model.full_name,
            nickname=model.nickname,
            gender=model.gender,
            date_of_birth=model.date_of_birth,
            address=model.address,
            profile_image_url=model.profile_image_url,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


class SQLAlchemyInterestRepository:
    """SQLAlchemy implementation of IInterestRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_or_create_id(self, name: str) -> int:
        """Return the id of the interest with this name, creating it if absent."""
        stmt = select(InterestModel).where(InterestModel.name == name)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            model = InterestModel(name=name)
            self._session.add(model)
            await self._session.flush()
        return model.id
