"""Integration tests for Profiles API."""

from collections.abc import Callable
from datetime import date

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from domain.entities.profile import EmergencyContact, ProfileUpdate
from domain.entities.user import Actor
from domain.services.profile_service import ProfileService
from infrastructure.database.models import InterestModel, UserInterestModel
from infrastructure.database.session import Database
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork

from tests.conftest import bearer


def _full_update(**overrides: object) -> dict[str, object]:
    body: dict[str, object] = {
        "full_name": "Alice Kim",
        "nickname": "Ali",
        "gender": "female",
        "address": "12 Maple St",
        "age": 72,
        "health_conditions": ["Diabetes", "  ", "Hypertension"],
        "interests": ["Gardening", "Chess"],
        "emergency_contacts": [
            {"name": "Jin Kim", "phone": "010-1234-5678", "relationship": "son"}
        ],
    }
    body.update(overrides)
    return body


class TestProfilesAPI:
    @pytest.mark.asyncio
    async def test_get_profile(self, client: AsyncClient, user_id: int) -> None:
        response = await client.get(f"/api/v1/profiles/{user_id}")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["email"] == "alice@example.com"
        assert data["full_name"] == "Alice Kim"
        assert data["interests"] == []

    @pytest.mark.asyncio
    async def test_get_unknown_user(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/profiles/999")

        assert response.status_code == 404
        assert response.json()["error_code"] == "USER_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_update_everything(self, client: AsyncClient, user_id: int) -> None:
        response = await client.put(
            f"/api/v1/profiles/{user_id}", json=_full_update(), headers=bearer(user_id)
        )

        assert response.status_code == 200, response.text
        data = response.json()["data"]
        assert data["nickname"] == "Ali"
        assert data["age"] == 72
        assert data["health_conditions"] == ["Diabetes", "Hypertension"]
        assert data["interests"] == ["Gardening", "Chess"]
        assert data["emergency_contacts"][0]["relationship"] == "son"

    @pytest.mark.asyncio
    async def test_age_as_string(self, client: AsyncClient, user_id: int) -> None:
        response = await client.put(
            f"/api/v1/profiles/{user_id}",
            json={"full_name": "Alice Kim", "age": "65"},
            headers=bearer(user_id),
        )

        assert response.status_code == 200
        assert response.json()["data"]["age"] == 65

    @pytest.mark.asyncio
    @pytest.mark.parametrize("age", [-1, 151, "old"])
    async def test_invalid_age(self, client: AsyncClient, user_id: int, age: object) -> None:
        response = await client.put(
            f"/api/v1/profiles/{user_id}",
            json={"full_name": "Alice Kim", "age": age},
            headers=bearer(user_id),
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_blank_full_name(self, client: AsyncClient, user_id: int) -> None:
        response = await client.put(
            f"/api/v1/profiles/{user_id}", json={"full_name": "  "}, headers=bearer(user_id)
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_omitted_collection_is_kept(self, client: AsyncClient, user_id: int) -> None:
        await client.put(
            f"/api/v1/profiles/{user_id}", json=_full_update(), headers=bearer(user_id)
        )

        response = await client.put(
            f"/api/v1/profiles/{user_id}",
            json={"full_name": "Alice K.", "interests": []},
            headers=bearer(user_id),
        )

        data = response.json()["data"]
        assert data["full_name"] == "Alice K."
        assert data["nickname"] == "Ali"
        assert data["interests"] == []
        assert data["health_conditions"] == ["Diabetes", "Hypertension"]

    @pytest.mark.asyncio
    async def test_other_users_profile_is_forbidden(
        self, client: AsyncClient, user_id: int, other_user_id: int
    ) -> None:
        response = await client.put(
            f"/api/v1/profiles/{user_id}",
            json=_full_update(full_name="Mallory"),
            headers=bearer(other_user_id),
        )

        assert response.status_code == 403
        current = await client.get(f"/api/v1/profiles/{user_id}")
        assert current.json()["data"]["full_name"] == "Alice Kim"

    @pytest.mark.asyncio
    async def test_shared_interest_is_stored_once(
        self, client: AsyncClient, database: Database, user_id: int, other_user_id: int
    ) -> None:
        for uid in (user_id, other_user_id):
            response = await client.put(
                f"/api/v1/profiles/{uid}",
                json={"full_name": "Someone", "interests": ["Hiking"]},
                headers=bearer(uid),
            )
            assert response.status_code == 200

        async with database.session_factory() as session:
            interests = (
                await session.execute(
                    select(func.count()).select_from(InterestModel).where(InterestModel.name == "Hiking")
                )
            ).scalar_one()
            links = (
                await session.execute(select(func.count()).select_from(UserInterestModel))
            ).scalar_one()

        assert interests == 1
        assert links == 2

    @pytest.mark.asyncio
    async def test_delete_profile(self, client: AsyncClient, user_id: int) -> None:
        await client.put(
            f"/api/v1/profiles/{user_id}", json=_full_update(), headers=bearer(user_id)
        )

        response = await client.delete(f"/api/v1/profiles/{user_id}", headers=bearer(user_id))

        assert response.status_code == 200
        data = (await client.get(f"/api/v1/profiles/{user_id}")).json()["data"]
        assert data["full_name"] is None
        assert data["interests"] == []
        assert data["emergency_contacts"] == []

        again = await client.delete(f"/api/v1/profiles/{user_id}", headers=bearer(user_id))
        assert again.status_code == 404


class TestProfileAtomicity:
    @pytest.mark.asyncio
    async def test_failed_contact_insert_rolls_back_everything(
        self, uow_factory: Callable[[], SQLAlchemyUnitOfWork], user_id: int
    ) -> None:
        """A contact violating NOT NULL leaves the stored profile untouched."""
        service = ProfileService(uow_factory, today=lambda: date(2026, 10, 19))
        actor = Actor(id=user_id, email="alice@example.com")

        with pytest.raises(IntegrityError):
            await service.update(
                user_id,
                actor,
                ProfileUpdate(
                    full_name="Changed Name",
                    fields={"nickname": "changed"},
                    health_conditions=["Asthma"],
                    interests=["Knitting"],
                    emergency_contacts=[
                        EmergencyContact(user_id=user_id, name=None, phone="010")  # type: ignore[arg-type]
                    ],
                ),
            )

        profile = await service.get(user_id)
        assert profile.profile is not None
        assert profile.profile.full_name == "Alice Kim"
        assert profile.profile.nickname is None
        assert profile.health_conditions == []
        assert profile.interests == []
        assert profile.emergency_contacts == []
