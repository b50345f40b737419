"""Populate a database with sample community data.

Usage:
    python scripts/seed.py [--create-tables] [--database-url URL]

Users are matched by email and interests by name, so the script can be run
repeatedly. News, activities and posts are skipped when a row with the same
title already exists.
"""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Any

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

import structlog  # noqa: E402
from sqlalchemy import select  # noqa: E402

from core.config import settings  # noqa: E402
from core.logging import setup_logging  # noqa: E402
from domain.entities.community import CommunityMedia  # noqa: E402
from domain.entities.profile import EmergencyContact, ProfileUpdate  # noqa: E402
from domain.entities.user import Actor, User, UserRole  # noqa: E402
from domain.services.activity_service import ActivityService  # noqa: E402
from domain.services.community_service import CommunityService  # noqa: E402
from domain.services.news_service import NewsService  # noqa: E402
from domain.services.profile_service import ProfileService  # noqa: E402
from infrastructure.database.models import (  # noqa: E402
    ActivityModel,
    CommunityPostModel,
    NewsModel,
)
from infrastructure.database.session import Database  # noqa: E402
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork  # noqa: E402

logger = structlog.get_logger()

INTERESTS = [
    "Reading",
    "Gardening",
    "Cooking",
    "Walking",
    "Volunteering",
    "Community Service",
    "Technology",
    "Music",
    "Art",
    "Sports",
]

USERS: list[dict[str, Any]] = [
    {
        "email": "admin@community.local",
        "role": UserRole.ADMIN,
        "phone": "010-0000-0001",
        "full_name": "Hana Choi",
        "fields": {"nickname": "Manager Choi", "gender": "female", "address": "Management Office"},
        "age": 48,
        "health_conditions": [],
        "interests": ["Community Service", "Technology"],
        "emergency_contacts": [("Minho Choi", "010-5555-0101", "spouse")],
    },
    {
        "email": "organizer@community.local",
        "role": UserRole.ORGANIZER,
        "phone": "010-0000-0002",
        "full_name": "Daniel Park",
        "fields": {"nickname": "Dan", "gender": "male", "address": "Building A, 302"},
        "age": 35,
        "health_conditions": [],
        "interests": ["Sports", "Music", "Walking"],
        "emergency_contacts": [("Sora Park", "010-5555-0202", "sister")],
    },
    {
        "email": "grace@community.local",
        "role": UserRole.USER,
        "phone": "010-0000-0003",
        "full_name": "Grace Lim",
        "fields": {"gender": "female", "address": "Building B, 105"},
        "age": 76,
        "health_conditions": ["Hypertension", "Knee arthritis"],
        "interests": ["Gardening", "Cooking", "Reading"],
        "emergency_contacts": [
            ("Joon Lim", "010-5555-0303", "son"),
            ("Mina Lim", "010-5555-0304", "daughter"),
        ],
    },
    {
        "email": "tom@community.local",
        "role": UserRole.USER,
        "phone": "010-0000-0004",
        "full_name": "Tom Yoon",
        "fields": {"gender": "male", "address": "Building C, 1201"},
        "age": 29,
        "health_conditions": [],
        "interests": ["Technology", "Volunteering", "Art"],
        "emergency_contacts": [],
    },
]

NEWS: list[dict[str, Any]] = [
    {
        "title": "Electrical Inspection",
        "content": "Power will be off in all buildings during the annual electrical inspection. Please charge devices beforehand.",
        "priority": "important",
        "date_time": "Nov. 12, 13:00 - 18:00",
    },
    {
        "title": "Rent Payment Reminder",
        "content": "Monthly rent is due on the 25th. Contact the management office if you need a payment plan.",
        "priority": "caution",
    },
    {
        "title": "Community Garden Update",
        "content": "New raised beds are ready. Sign up at the office to reserve a plot for winter vegetables.",
        "priority": "notice",
    },
    {
        "title": "Water Supply Maintenance",
        "content": "Water pressure may be low while the main pump is serviced.",
        "priority": "important",
        "date_time": "Nov. 18, 09:00 - 15:00",
    },
    {
        "title": "Monthly Residents Meeting",
        "content": "Agenda: parking rules, holiday decorations and the new recycling schedule.",
        "priority": "notice",
        "date_time": "Nov. 28, 19:00",
    },
    {
        "title": "Lost Cat",
        "content": "An orange tabby named Mango went missing near Building C. Please call the office if you see him.",
        "priority": "caution",
    },
    {
        "title": "Security Cameras Installed",
        "content": "Cameras now cover the parking lot and both entrances.",
        "priority": "notice",
    },
    {
        "title": "Fire Drill",
        "content": "All residents are asked to take part in the fire drill. Meet at the front lawn when the alarm sounds.",
        "priority": "important",
        "date_time": "Dec. 3, 10:00",
    },
]

ACTIVITIES: list[dict[str, Any]] = [
    {
        "title": "Chess Tournament",
        "description": "Friendly round-robin for all levels. Boards provided.",
        "date": "2026-11-15",
        "time": "14:00",
        "end_time": "18:00",
        "place": "Community Center, Room 101",
        "capacity": 16,
        "category": "Games",
    },
    {
        "title": "Morning Yoga",
        "description": "Gentle stretching for every body. Bring a mat.",
        "date": "2026-11-16",
        "time": "07:00",
        "end_time": "08:30",
        "place": "Central Park, Yoga Area",
        "capacity": 20,
        "category": "Fitness",
    },
    {
        "title": "Book Club",
        "description": "This month we discuss a short story collection chosen by the group.",
        "date": "2026-11-18",
        "time": "19:00",
        "end_time": "21:00",
        "place": "Library, Meeting Room A",
        "capacity": 12,
        "category": "Education",
    },
    {
        "title": "Garden Cleanup",
        "description": "Help prepare the community garden for winter.",
        "date": "2026-11-20",
        "time": "09:00",
        "end_time": "12:00",
        "place": "Community Garden, Plot 5",
        "capacity": 25,
        "category": "Volunteer",
    },
    {
        "title": "Cooking Workshop",
        "description": "Learn three easy soups for cold days.",
        "date": "2026-11-22",
        "time": "16:00",
        "end_time": "19:00",
        "place": "Community Kitchen",
        "capacity": 8,
        "category": "Cooking",
    },
    {
        "title": "Smartphone Help Desk",
        "description": "Volunteers answer questions about phones, messaging apps and video calls.",
        "date": "2026-11-25",
        "time": "18:30",
        "end_time": "20:30",
        "place": "Tech Hub, Room B",
        "capacity": 30,
        "category": "Technology",
    },
    {
        "title": "Residents Art Show",
        "description": "Paintings and crafts made by our neighbours.",
        "date": "2026-11-28",
        "time": "18:00",
        "end_time": "22:00",
        "place": "Lobby Gallery",
        "capacity": 50,
        "category": "Arts",
    },
    {
        "title": "Basketball Pickup Games",
        "description": "Teams formed on the spot. All ages welcome.",
        "date": "2026-11-30",
        "time": "10:00",
        "end_time": "16:00",
        "place": "Sports Complex, Court 2",
        "capacity": 24,
        "category": "Sports",
    },
]

POSTS: list[dict[str, Any]] = [
    {
        "author": "grace@community.local",
        "title": "Extra tomato seedlings",
        "content": "I have more seedlings than I can plant. Knock on 105 if you want some.",
        "media": [("/static/seed/seedlings.jpg", "seedlings.jpg", "image/jpeg")],
    },
    {
        "author": "tom@community.local",
        "title": "Found a bike key",
        "content": "Found near the bike rack this morning. It is at the management office.",
        "media": [],
    },
    {
        "author": "organizer@community.local",
        "title": "Photos from the autumn picnic",
        "content": "Thanks to everyone who came! A few pictures below.",
        "media": [
            ("/static/seed/picnic-1.jpg", "picnic-1.jpg", "image/jpeg"),
            ("/static/seed/picnic-2.jpg", "picnic-2.jpg", "image/jpeg"),
        ],
    },
]


async def _existing_titles(database: Database, model: Any) -> set[str]:
    async with database.session_factory() as session:
        result = await session.execute(select(model.title))
        return set(result.scalars())


async def seed_users(database: Database) -> dict[str, Actor]:
    """Create the sample users (matched by email) and write their profiles."""
    uow_factory = lambda: SQLAlchemyUnitOfWork(database.session_factory)  # noqa: E731
    actors: dict[str, Actor] = {}

    async with uow_factory() as uow:
        for interest in INTERESTS:
            await uow.interests.get_or_create_id(interest)
        for data in USERS:
            user = await uow.users.get_by_email(data["email"])
            if user is None:
                user = await uow.users.create(
                    User(email=data["email"], role=data["role"], phone=data["phone"])
                )
                logger.info("seed_user_created", email=user.email, role=user.role.value)
            actors[user.email] = Actor(id=user.id, email=user.email, role=user.role)
        await uow.commit()

    profiles = ProfileService(uow_factory)
    for data in USERS:
        actor = actors[data["email"]]
        await profiles.update(
            actor.id,
            actor,
            ProfileUpdate(
                full_name=data["full_name"],
                fields=data["fields"],
                age=data["age"],
                health_conditions=data["health_conditions"],
                interests=data["interests"],
                emergency_contacts=[
                    EmergencyContact(user_id=actor.id, name=name, phone=phone, relationship=rel)
                    for name, phone, rel in data["emergency_contacts"]
                ],
            ),
        )

    return actors


async def seed_content(database: Database, actors: dict[str, Actor]) -> None:
    """Create news, activities and community posts that do not exist yet."""
    uow_factory = lambda: SQLAlchemyUnitOfWork(database.session_factory)  # noqa: E731
    admin = actors["admin@community.local"]
    organizer = actors["organizer@community.local"]

    news = NewsService(uow_factory)
    existing = await _existing_titles(database, NewsModel)
    for item in NEWS:
        if item["title"] not in existing:
            await news.create(admin, **item)

    activities = ActivityService(uow_factory)
    existing = await _existing_titles(database, ActivityModel)
    for item in ACTIVITIES:
        if item["title"] not in existing:
            await activities.create(organizer, **item)

    community = CommunityService(uow_factory)
    existing = await _existing_titles(database, CommunityPostModel)
    for item in POSTS:
        if item["title"] in existing:
            continue
        await community.create_post(
            actors[item["author"]],
            title=item["title"],
            content=item["content"],
            media=[
                CommunityMedia(file_url=url, file_name=name, mime_type=mime)
                for url, name, mime in item["media"]
            ],
        )


async def main(database_url: str, create_tables: bool) -> None:
    database = Database(database_url)
    try:
        if create_tables:
            await database.create_all()
            logger.info("seed_tables_created")
        actors = await seed_users(database)
        await seed_content(database, actors)
        logger.info("seed_completed", users=len(actors))
    finally:
        await database.dispose()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed the community database with sample data.")
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create all tables before seeding (instead of running migrations)",
    )
    parser.add_argument(
        "--database-url",
        default=settings.async_database_url,
        help="Database URL (defaults to DATABASE_URL)",
    )
    return parser.parse_args(argv)


if __name__ == "__main__":
    setup_logging()
    args = parse_args()
    asyncio.run(main(args.database_url, args.create_tables))
