"""Unit tests for Community service layer."""

import pytest

from core.exceptions import (
    AuthorizationError,
    CommentNotFoundError,
    CommunityPostNotFoundError,
    DuplicateEntryError,
    UserNotFoundError,
    ValidationError,
)
from domain.entities.community import CommunityComment, CommunityPost, build_comment_tree
from domain.entities.user import Actor
from domain.services.community_service import CommunityService

from tests.unit.conftest import FakeUnitOfWork


@pytest.fixture
def service(uow: FakeUnitOfWork) -> CommunityService:
    return CommunityService(lambda: uow)


@pytest.fixture
def sample_post(actor: Actor) -> CommunityPost:
    return CommunityPost(id=5, title="Lost cat", content="Grey, answers to Mochi", author_id=actor.id)


class TestToggleLike:
    @pytest.mark.asyncio
    async def test_first_toggle_likes(
        self, service: CommunityService, uow: FakeUnitOfWork, actor: Actor
    ) -> None:
        uow.community_posts.exists.return_value = True
        uow.community_posts.has_liked.return_value = False

        result = await service.toggle_like(actor, 5)

        assert result.liked is True
        uow.community_posts.add_like.assert_called_once_with(5, actor.id)
        uow.community_posts.adjust_like_count.assert_called_once_with(5, 1)
        assert uow.committed

    @pytest.mark.asyncio
    async def test_second_toggle_unlikes(
        self, service: CommunityService, uow: FakeUnitOfWork, actor: Actor
    ) -> None:
        uow.community_posts.exists.return_value = True
        uow.community_posts.has_liked.return_value = True
        uow.community_posts.remove_like.return_value = 1

        result = await service.toggle_like(actor, 5)

        assert result.liked is False
        uow.community_posts.adjust_like_count.assert_called_once_with(5, -1)
        uow.community_posts.add_like.assert_not_called()

    @pytest.mark.asyncio
    async def test_concurrent_insert_counts_as_liked(
        self, service: CommunityService, uow: FakeUnitOfWork, actor: Actor
    ) -> None:
        """A unique-constraint race reports liked without moving the counter."""
        uow.community_posts.exists.return_value = True
        uow.community_posts.has_liked.return_value = False
        uow.community_posts.add_like.side_effect = DuplicateEntryError("like")

        result = await service.toggle_like(actor, 5)

        assert result.liked is True
        assert uow.rolled_back
        assert not uow.committed
        uow.community_posts.adjust_like_count.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_post(
        self, service: CommunityService, uow: FakeUnitOfWork, actor: Actor
    ) -> None:
        uow.community_posts.exists.return_value = False

        with pytest.raises(CommunityPostNotFoundError):
            await service.toggle_like(actor, 404)

    @pytest.mark.asyncio
    async def test_cannot_toggle_for_someone_else(
        self, service: CommunityService, uow: FakeUnitOfWork, actor: Actor
    ) -> None:
        with pytest.raises(AuthorizationError):
            await service.toggle_like(actor, 5, user_id=actor.id + 1)

        uow.community_posts.exists.assert_not_called()

    @pytest.mark.asyncio
    async def test_admin_may_toggle_for_someone_else(
        self, service: CommunityService, uow: FakeUnitOfWork, admin: Actor
    ) -> None:
        uow.community_posts.exists.return_value = True
        uow.community_posts.has_liked.return_value = False

        result = await service.toggle_like(admin, 5, user_id=7)

        assert result.user_id == 7
        uow.community_posts.add_like.assert_called_once_with(5, 7)

    @pytest.mark.asyncio
    async def test_admin_toggle_for_unknown_user(
        self, service: CommunityService, uow: FakeUnitOfWork, admin: Actor
    ) -> None:
        uow.community_posts.exists.return_value = True
        uow.users.get.return_value = None

        with pytest.raises(UserNotFoundError):
            await service.toggle_like(admin, 5, user_id=999)

        uow.community_posts.add_like.assert_not_called()
        uow.community_posts.adjust_like_count.assert_not_called()
        assert not uow.committed


class TestComments:
    @pytest.mark.asyncio
    async def test_comment_bumps_counter(
        self, service: CommunityService, uow: FakeUnitOfWork, actor: Actor
    ) -> None:
        uow.community_posts.exists.return_value = True
        uow.community_comments.create.side_effect = lambda c: c

        comment = await service.add_comment(actor, post_id=5, content="Seen it near the bakery")

        assert comment.author_id == actor.id
        uow.community_posts.adjust_comment_count.assert_called_once_with(5, 1)
        assert uow.committed

    @pytest.mark.asyncio
    async def test_reply_parent_must_be_on_same_post(
        self, service: CommunityService, uow: FakeUnitOfWork, actor: Actor
    ) -> None:
        uow.community_posts.exists.return_value = True
        uow.community_comments.get.return_value = CommunityComment(
            id=3, post_id=6, author_id=2, content="elsewhere"
        )

        with pytest.raises(ValidationError):
            await service.add_comment(actor, post_id=5, content="reply", parent_id=3)

        uow.community_comments.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_reply_to_missing_parent(
        self, service: CommunityService, uow: FakeUnitOfWork, actor: Actor
    ) -> None:
        uow.community_posts.exists.return_value = True
        uow.community_comments.get.return_value = None

        with pytest.raises(CommentNotFoundError):
            await service.add_comment(actor, post_id=5, content="reply", parent_id=3)

    @pytest.mark.asyncio
    async def test_blank_comment(self, service: CommunityService, actor: Actor) -> None:
        with pytest.raises(ValidationError):
            await service.add_comment(actor, post_id=5, content="   ")

    @pytest.mark.asyncio
    async def test_delete_subtracts_replies_too(
        self, service: CommunityService, uow: FakeUnitOfWork, actor: Actor
    ) -> None:
        uow.community_comments.get.return_value = CommunityComment(
            id=3, post_id=5, author_id=actor.id, content="parent"
        )
        uow.community_comments.delete_with_replies.return_value = 3

        removed = await service.delete_comment(3, actor)

        assert removed == 3
        uow.community_posts.adjust_comment_count.assert_called_once_with(5, -3)

    @pytest.mark.asyncio
    async def test_non_author_cannot_delete_comment(
        self, service: CommunityService, uow: FakeUnitOfWork, stranger: Actor
    ) -> None:
        uow.community_comments.get.return_value = CommunityComment(
            id=3, post_id=5, author_id=1, content="mine"
        )

        with pytest.raises(AuthorizationError):
            await service.delete_comment(3, stranger)


class TestPosts:
    @pytest.mark.asyncio
    async def test_get_post_counts_view_and_nests_comments(
        self,
        service: CommunityService,
        uow: FakeUnitOfWork,
        sample_post: CommunityPost,
    ) -> None:
        uow.community_posts.exists.return_value = True
        uow.community_posts.get.return_value = sample_post
        uow.community_comments.list_for_post.return_value = [
            CommunityComment(id=1, post_id=5, author_id=1, content="top"),
            CommunityComment(id=2, post_id=5, author_id=2, content="reply", parent_id=1),
        ]

        post = await service.get_post(5)

        uow.community_posts.increment_views.assert_called_once_with(5)
        assert [c.id for c in post.comments] == [1]
        assert [r.id for r in post.comments[0].replies] == [2]

    @pytest.mark.asyncio
    async def test_update_rejects_unknown_fields(
        self, service: CommunityService, actor: Actor
    ) -> None:
        with pytest.raises(ValidationError):
            await service.update_post(5, actor, {"like_count": 100})

    @pytest.mark.asyncio
    async def test_non_author_cannot_update(
        self,
        service: CommunityService,
        uow: FakeUnitOfWork,
        stranger: Actor,
        sample_post: CommunityPost,
    ) -> None:
        uow.community_posts.get.return_value = sample_post

        with pytest.raises(AuthorizationError):
            await service.update_post(5, stranger, {"title": "mine now"})

        uow.community_posts.update.assert_not_called()


def test_orphan_replies_become_top_level() -> None:
    comments = [CommunityComment(id=4, post_id=1, author_id=1, content="x", parent_id=99)]

    assert build_comment_tree(comments) == comments
