"""SQLAlchemy implementation of community board repositories."""

from typing import Any

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from core.exceptions import DuplicateEntryError
from domain.entities.community import CommunityComment, CommunityMedia, CommunityPost
from domain.entities.pagination import PageRequest
from infrastructure.database.errors import is_unique_violation
from infrastructure.database.models import (
    CommunityCommentModel,
    CommunityLikeModel,
    CommunityMediaModel,
    CommunityPostModel,
)
from infrastructure.database.repositories.sqlalchemy_user_repo import (
    author_from_row,
    select_with_author,
)


class SQLAlchemyCommunityPostRepository:
    """SQLAlchemy implementation of ICommunityPostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_published(self, page: PageRequest) -> tuple[list[CommunityPost], int]:
        """Get one page of published posts (newest first) and the total."""
        count_stmt = (
            select(func.count())
            .select_from(CommunityPostModel)
            .where(CommunityPostModel.is_published.is_(True))
        )
        total = (await self._session.execute(count_stmt)).scalar_one()

        stmt = (
            self._select()
            .where(CommunityPostModel.is_published.is_(True))
            .order_by(CommunityPostModel.created_at.desc(), CommunityPostModel.id.desc())
            .offset(page.offset)
            .limit(page.limit)
        )
        result = await self._session.execute(stmt)
        return [self._row_to_entity(row) for row in result], total

    async def get(self, id: int) -> CommunityPost | None:
        """Get a post with its media."""
        stmt = self._select().where(CommunityPostModel.id == id)
        row = (await self._session.execute(stmt)).first()
        return self._row_to_entity(row) if row else None

    async def exists(self, id: int) -> bool:
        """Check whether a post exists."""
        stmt = select(CommunityPostModel.id).where(CommunityPostModel.id == id)
        return (await self._session.execute(stmt)).first() is not None

    async def create(self, post: CommunityPost) -> CommunityPost:
        """Create a post together with its media rows."""
        model = CommunityPostModel(
            title=post.title,
            content=post.content,
            author_id=post.author_id,
            is_published=post.is_published,
            like_count=post.like_count,
            comment_count=post.comment_count,
            view_count=post.view_count,
            created_at=post.created_at,
            updated_at=post.updated_at,
            media=[
                CommunityMediaModel(
                    file_url=media.file_url,
                    file_type=media.file_type,
                    file_name=media.file_name,
                    file_size=media.file_size,
                    mime_type=media.mime_type,
                )
                for media in post.media
            ],
        )
        self._session.add(model)
        await self._session.flush()
        created = await self.get(model.id)
        if not created:
            raise ValueError(f"Community post {model.id} not found after flush")
        return created

    async def update(self, post: CommunityPost) -> CommunityPost:
        """Update title, content and published flag."""
        model = await self._session.get(CommunityPostModel, post.id)
        if not model:
            raise ValueError(f"Community post {post.id} not found")

        model.title = post.title
        model.content = post.content
        model.is_published = post.is_published
        model.updated_at = post.updated_at

        await self._session.flush()
        updated = await self.get(model.id)
        if not updated:
            raise ValueError(f"Community post {model.id} not found after flush")
        return updated

    async def delete(self, id: int) -> bool:
        """Delete a post with its media, comments and likes."""
        for child in (CommunityLikeModel, CommunityMediaModel, CommunityCommentModel):
            await self._session.execute(delete(child).where(child.post_id == id))
        result = await self._session.execute(
            delete(CommunityPostModel).where(CommunityPostModel.id == id)
        )
        return bool(result.rowcount)

    async def increment_views(self, id: int) -> None:
        """Add one view."""
        await self._adjust(id, view_count=CommunityPostModel.view_count + 1)

    async def adjust_like_count(self, id: int, delta: int) -> None:
        """Add ``delta`` to like_count."""
        await self._adjust(id, like_count=CommunityPostModel.like_count + delta)

    async def adjust_comment_count(self, id: int, delta: int) -> None:
        """Add ``delta`` to comment_count."""
        await self._adjust(id, comment_count=CommunityPostModel.comment_count + delta)

    async def has_liked(self, post_id: int, user_id: int) -> bool:
        """Check whether the like row exists."""
        stmt = select(CommunityLikeModel.id).where(
            CommunityLikeModel.post_id == post_id,
            CommunityLikeModel.user_id == user_id,
        )
        return (await self._session.execute(stmt)).first() is not None

    async def add_like(self, post_id: int, user_id: int) -> None:
        """Insert a like row. Raises DuplicateEntryError if it exists."""
        self._session.add(CommunityLikeModel(post_id=post_id, user_id=user_id))
        try:
            await self._session.flush()
        except IntegrityError as e:
            if is_unique_violation(e):
                raise DuplicateEntryError("like") from e
            raise

    async def remove_like(self, post_id: int, user_id: int) -> int:
        """Delete a like row and return the number of rows removed."""
        stmt = delete(CommunityLikeModel).where(
            CommunityLikeModel.post_id == post_id,
            CommunityLikeModel.user_id == user_id,
        )
        result = await self._session.execute(stmt)
        return result.rowcount

    async def _adjust(self, id: int, **values: Any) -> None:
        stmt = update(CommunityPostModel).where(CommunityPostModel.id == id).values(**values)
        await self._session.execute(stmt)

    def _select(self) -> Any:
        return select_with_author(CommunityPostModel, CommunityPostModel.author_id).options(
            selectinload(CommunityPostModel.media)
        )

    def _row_to_entity(self, row: Any) -> CommunityPost:
        """Convert a post+author row to a domain entity."""
        model: CommunityPostModel = row.CommunityPostModel
        return CommunityPost(
            id=model.id,
            title=model.title,
            content=model.content,
            author_id=model.author_id,
            is_published=model.is_published,
            like_count=model.like_count,
            comment_count=model.comment_count,
            view_count=model.view_count,
            created_at=model.created_at,
            updated_at=model.updated_at,
            author=author_from_row(model.author_id, row),
            media=[
                CommunityMedia(
                    id=media.id,
                    post_id=media.post_id,
                    file_url=media.file_url,
                    file_type=media.file_type,
                    file_name=media.file_name,
                    file_size=media.file_size,
                    mime_type=media.mime_type,
                )
                for media in model.media
            ],
        )


class SQLAlchemyCommunityCommentRepository:
    """SQLAlchemy implementation of ICommunityCommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: int) -> CommunityComment | None:
        """Get a comment by ID."""
        stmt = select_with_author(CommunityCommentModel, CommunityCommentModel.author_id).where(
            CommunityCommentModel.id == id
        )
        row = (await self._session.execute(stmt)).first()
        return self._row_to_entity(row) if row else None

    async def list_for_post(self, post_id: int) -> list[CommunityComment]:
        """Get all comments of a post as a flat, oldest-first list."""
        stmt = (
            select_with_author(CommunityCommentModel, CommunityCommentModel.author_id)
            .where(CommunityCommentModel.post_id == post_id)
            .order_by(CommunityCommentModel.created_at, CommunityCommentModel.id)
        )
        result = await self._session.execute(stmt)
        return [self._row_to_entity(row) for row in result]

    async def create(self, comment: CommunityComment) -> CommunityComment:
        """Create a comment."""
        model = CommunityCommentModel(
            post_id=comment.post_id,
            author_id=comment.author_id,
            parent_id=comment.parent_id,
            content=comment.content,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )
        self._session.add(model)
        await self._session.flush()
        created = await self.get(model.id)
        if not created:
            raise ValueError(f"Comment {model.id} not found after flush")
        return created

    async def delete_with_replies(self, id: int) -> int:
        """Delete a comment and all of its descendants. Returns rows removed."""
        ids = [id]
        frontier = [id]
        while frontier:
            stmt = select(CommunityCommentModel.id).where(
                CommunityCommentModel.parent_id.in_(frontier)
            )
            frontier = [cid for cid in (await self._session.execute(stmt)).scalars() if cid not in ids]
            ids.extend(frontier)

        result = await self._session.execute(
            delete(CommunityCommentModel).where(CommunityCommentModel.id.in_(ids))
        )
        return result.rowcount

    def _row_to_entity(self, row: Any) -> CommunityComment:
        """Convert a comment+author row to a domain entity."""
        model: CommunityCommentModel = row.CommunityCommentModel
        return CommunityComment(
            id=model.id,
            post_id=model.post_id,
            author_id=model.author_id,
            parent_id=model.parent_id,
            content=model.content,
            created_at=model.created_at,
            updated_at=model.updated_at,
            author=author_from_row(model.author_id, row),
        )
