"""Community board service layer with business logic.

Posts carry two denormalized counters, ``like_count`` and ``comment_count``.
Every operation that adds or removes a like or comment row moves the matching
counter in the same unit of work, so the counters always equal the row counts.
"""

from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any

import structlog

from core.exceptions import (
    AuthorizationError,
    CommentNotFoundError,
    CommunityPostNotFoundError,
    DuplicateEntryError,
    UserNotFoundError,
    ValidationError,
)
from domain.entities.community import (
    CommunityComment,
    CommunityMedia,
    CommunityPost,
    build_comment_tree,
)
from domain.entities.pagination import Page, PageRequest
from domain.entities.user import Actor
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()

UPDATABLE_FIELDS = frozenset({"title", "content", "is_published"})


@dataclass(frozen=True, slots=True)
class LikeResult:
    """Outcome of a like toggle."""

    post_id: int
    user_id: int
    liked: bool


class CommunityService:
    """Service layer for community posts, comments and likes."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    # Posts

    async def list_posts(self, page: PageRequest) -> Page[CommunityPost]:
        """Get one page of published posts, newest first."""
        async with self._uow_factory() as uow:
            items, total = await uow.community_posts.list_published(page)
            return Page(items=items, total=total, page=page.page, limit=page.limit)

    async def get_post(self, post_id: int) -> CommunityPost:
        """Get a post with media and comment tree, counting one view."""
        async with self._uow_factory() as uow:
            if not await uow.community_posts.exists(post_id):
                raise CommunityPostNotFoundError(post_id)

            await uow.community_posts.increment_views(post_id)
            await uow.commit()

            post = await uow.community_posts.get(post_id)
            if not post:
                raise CommunityPostNotFoundError(post_id)
            comments = await uow.community_comments.list_for_post(post_id)
            post.comments = build_comment_tree(comments)
            return post

    async def create_post(
        self,
        actor: Actor,
        title: str,
        content: str,
        media: list[CommunityMedia] | None = None,
        is_published: bool = True,
    ) -> CommunityPost:
        """Create a post authored by ``actor``."""
        if not (title or "").strip():
            raise ValidationError("title is required", field="title")
        if not (content or "").strip():
            raise ValidationError("content is required", field="content")

        async with self._uow_factory() as uow:
            post = await uow.community_posts.create(
                CommunityPost(
                    title=title,
                    content=content,
                    author_id=actor.id,
                    is_published=is_published,
                    media=list(media or []),
                )
            )
            await uow.commit()

        logger.info("community_post_created", post_id=post.id, author_id=actor.id)
        return post

    async def update_post(
        self, post_id: int, actor: Actor, changes: dict[str, Any]
    ) -> CommunityPost:
        """Update a post. Only the author or an admin may do this."""
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown post fields: {', '.join(sorted(unknown))}")
        for name in ("title", "content"):
            if name in changes and not (changes[name] or "").strip():
                raise ValidationError(f"{name} is required", field=name)
        if "is_published" in changes and changes["is_published"] is None:
            raise ValidationError("is_published cannot be null", field="is_published")

        async with self._uow_factory() as uow:
            post = await uow.community_posts.get(post_id)
            if not post:
                raise CommunityPostNotFoundError(post_id)
            if not actor.can_modify(post.author_id):
                raise AuthorizationError("Only the author can modify this post")

            updated = await uow.community_posts.update(
                replace(post, **changes, updated_at=datetime.utcnow())
            )
            await uow.commit()
            return updated

    async def delete_post(self, post_id: int, actor: Actor) -> None:
        """Delete a post with everything attached to it."""
        async with self._uow_factory() as uow:
            post = await uow.community_posts.get(post_id)
            if not post:
                raise CommunityPostNotFoundError(post_id)
            if not actor.can_modify(post.author_id):
                raise AuthorizationError("Only the author can delete this post")

            await uow.community_posts.delete(post_id)
            await uow.commit()

        logger.info("community_post_deleted", post_id=post_id, actor_id=actor.id)

    # Comments

    async def add_comment(
        self,
        actor: Actor,
        post_id: int,
        content: str,
        parent_id: int | None = None,
    ) -> CommunityComment:
        """Comment on a post, optionally as a reply to another comment."""
        if not (content or "").strip():
            raise ValidationError("content is required", field="content")

        async with self._uow_factory() as uow:
            if not await uow.community_posts.exists(post_id):
                raise CommunityPostNotFoundError(post_id)
            if parent_id is not None:
                parent = await uow.community_comments.get(parent_id)
                if not parent:
                    raise CommentNotFoundError(parent_id)
                if parent.post_id != post_id:
                    raise ValidationError(
                        "Parent comment belongs to another post", field="parent_id"
                    )

            comment = await uow.community_comments.create(
                CommunityComment(
                    post_id=post_id,
                    author_id=actor.id,
                    parent_id=parent_id,
                    content=content,
                )
            )
            await uow.community_posts.adjust_comment_count(post_id, 1)
            await uow.commit()

        logger.info("community_comment_created", comment_id=comment.id, post_id=post_id)
        return comment

    async def delete_comment(self, comment_id: int, actor: Actor) -> int:
        """Delete a comment with its replies. Returns the number of rows removed."""
        async with self._uow_factory() as uow:
            comment = await uow.community_comments.get(comment_id)
            if not comment:
                raise CommentNotFoundError(comment_id)
            if not actor.can_modify(comment.author_id):
                raise AuthorizationError("Only the author can delete this comment")

            removed = await uow.community_comments.delete_with_replies(comment_id)
            if removed:
                await uow.community_posts.adjust_comment_count(comment.post_id, -removed)
            await uow.commit()

        logger.info("community_comment_deleted", comment_id=comment_id, removed=removed)
        return removed

    # Likes

    async def toggle_like(self, actor: Actor, post_id: int, user_id: int | None = None) -> LikeResult:
        """Flip the like state of ``user_id`` (default: the actor) on a post.

        Runs in one transaction. If a concurrent toggle inserted the like row
        first, the insert's unique-constraint violation is treated as "liked"
        and the counter is left alone.
        """
        target = actor.id if user_id is None else user_id
        if target != actor.id and not actor.is_admin:
            raise AuthorizationError("Cannot toggle likes for another user")

        async with self._uow_factory() as uow:
            if not await uow.community_posts.exists(post_id):
                raise CommunityPostNotFoundError(post_id)
            if target != actor.id and not await uow.users.get(target):
                raise UserNotFoundError(target)

            if await uow.community_posts.has_liked(post_id, target):
                removed = await uow.community_posts.remove_like(post_id, target)
                if removed:
                    await uow.community_posts.adjust_like_count(post_id, -removed)
                await uow.commit()
                return LikeResult(post_id=post_id, user_id=target, liked=False)

            try:
                await uow.community_posts.add_like(post_id, target)
            except DuplicateEntryError:
                await uow.rollback()
                logger.info("community_like_conflict", post_id=post_id, user_id=target)
                return LikeResult(post_id=post_id, user_id=target, liked=True)

            await uow.community_posts.adjust_like_count(post_id, 1)
            await uow.commit()
            return LikeResult(post_id=post_id, user_id=target, liked=True)

    async def like_status(self, post_id: int, user_id: int) -> LikeResult:
        """Report whether a user has liked a post."""
        async with self._uow_factory() as uow:
            liked = await uow.community_posts.has_liked(post_id, user_id)
            return LikeResult(post_id=post_id, user_id=user_id, liked=liked)
