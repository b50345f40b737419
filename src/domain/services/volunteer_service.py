"""Volunteer request service layer with business logic."""

from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import datetime

import structlog

from core.exceptions import (
    AlreadySupportedError,
    AuthorizationError,
    DuplicateEntryError,
    NotSupportedError,
    ValidationError,
    VolunteerPostNotFoundError,
)
from domain.entities.pagination import Page, PageRequest
from domain.entities.user import Actor
from domain.entities.volunteer import VolunteerPost
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


@dataclass(frozen=True, slots=True)
class SupportStatus:
    """Whether a user supports a post, and the post's current count."""

    post_id: int
    user_id: int
    supported: bool
    support_count: int


class VolunteerService:
    """Service layer for volunteer posts and supports."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def list_posts(self, page: PageRequest) -> Page[VolunteerPost]:
        """Get one page of posts, newest first."""
        async with self._uow_factory() as uow:
            items, total = await uow.volunteer_posts.list_recent(page)
            return Page(items=items, total=total, page=page.page, limit=page.limit)

    async def get_post(self, post_id: int) -> VolunteerPost:
        """Get a post by ID."""
        async with self._uow_factory() as uow:
            post = await uow.volunteer_posts.get(post_id)
            if not post:
                raise VolunteerPostNotFoundError(post_id)
            return post

    async def create_post(
        self,
        actor: Actor,
        title: str,
        description: str,
        date_time: datetime,
        reward: str | None = None,
    ) -> VolunteerPost:
        """Create a volunteer request owned by ``actor``."""
        self._validate(title, description, date_time)

        async with self._uow_factory() as uow:
            post = await uow.volunteer_posts.create(
                VolunteerPost(
                    title=title,
                    description=description,
                    date_time=date_time,
                    reward=reward,
                    user_id=actor.id,
                )
            )
            await uow.commit()

        logger.info("volunteer_post_created", post_id=post.id, user_id=actor.id)
        return post

    async def update_post(
        self,
        post_id: int,
        actor: Actor,
        title: str,
        description: str,
        date_time: datetime,
        reward: str | None = None,
    ) -> VolunteerPost:
        """Replace a post's content. Only the owner or an admin may do this."""
        self._validate(title, description, date_time)

        async with self._uow_factory() as uow:
            post = await uow.volunteer_posts.get(post_id)
            if not post:
                raise VolunteerPostNotFoundError(post_id)
            if not actor.can_modify(post.user_id):
                raise AuthorizationError("Only the owner can modify this post")

            updated = await uow.volunteer_posts.update(
                replace(
                    post,
                    title=title,
                    description=description,
                    date_time=date_time,
                    reward=reward,
                    updated_at=datetime.utcnow(),
                )
            )
            await uow.commit()
            return updated

    async def delete_post(self, post_id: int, actor: Actor) -> None:
        """Delete a post with its supports."""
        async with self._uow_factory() as uow:
            post = await uow.volunteer_posts.get(post_id)
            if not post:
                raise VolunteerPostNotFoundError(post_id)
            if not actor.can_modify(post.user_id):
                raise AuthorizationError("Only the owner can delete this post")

            await uow.volunteer_posts.delete(post_id)
            await uow.commit()

        logger.info("volunteer_post_deleted", post_id=post_id, actor_id=actor.id)

    async def support(self, post_id: int, actor: Actor) -> SupportStatus:
        """Support a post: insert the support row and bump the counter."""
        async with self._uow_factory() as uow:
            if not await uow.volunteer_posts.get(post_id):
                raise VolunteerPostNotFoundError(post_id)
            if await uow.volunteer_posts.has_supported(post_id, actor.id):
                raise AlreadySupportedError(post_id)

            try:
                await uow.volunteer_posts.add_support(post_id, actor.id)
            except DuplicateEntryError:
                await uow.rollback()
                raise AlreadySupportedError(post_id) from None
            await uow.volunteer_posts.adjust_support_count(post_id, 1)
            await uow.commit()

            return await self._status(uow, post_id, actor.id, supported=True)

    async def unsupport(self, post_id: int, actor: Actor) -> SupportStatus:
        """Withdraw support: delete the support row and lower the counter."""
        async with self._uow_factory() as uow:
            if not await uow.volunteer_posts.get(post_id):
                raise VolunteerPostNotFoundError(post_id)

            removed = await uow.volunteer_posts.remove_support(post_id, actor.id)
            if not removed:
                raise NotSupportedError(post_id)
            await uow.volunteer_posts.adjust_support_count(post_id, -removed)
            await uow.commit()

            return await self._status(uow, post_id, actor.id, supported=False)

    async def support_status(self, post_id: int, actor: Actor) -> SupportStatus:
        """Report whether the actor supports a post."""
        async with self._uow_factory() as uow:
            if not await uow.volunteer_posts.get(post_id):
                raise VolunteerPostNotFoundError(post_id)
            supported = await uow.volunteer_posts.has_supported(post_id, actor.id)
            return await self._status(uow, post_id, actor.id, supported=supported)

    async def _status(
        self, uow: IUnitOfWork, post_id: int, user_id: int, supported: bool
    ) -> SupportStatus:
        post = await uow.volunteer_posts.get(post_id)
        if not post:
            raise VolunteerPostNotFoundError(post_id)
        return SupportStatus(
            post_id=post_id,
            user_id=user_id,
            supported=supported,
            support_count=post.support_count,
        )

    def _validate(self, title: str, description: str, date_time: datetime | None) -> None:
        if not (title or "").strip():
            raise ValidationError("title is required", field="title")
        if not (description or "").strip():
            raise ValidationError("description is required", field="description")
        if date_time is None:
            raise ValidationError("dateTime is required", field="dateTime")
