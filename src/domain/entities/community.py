"""Community board domain entities."""

from dataclasses import dataclass, field
from datetime import datetime

from domain.entities.user import AuthorSummary


@dataclass
class CommunityMedia:
    """A file attached to a community post."""

    file_url: str
    file_type: str = "image"
    file_name: str | None = None
    file_size: int | None = None
    mime_type: str | None = None
    post_id: int | None = None
    id: int | None = None


@dataclass
class CommunityComment:
    """A comment on a post. Replies point at their parent comment."""

    post_id: int
    author_id: int
    content: str
    parent_id: int | None = None
    id: int | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)
    author: AuthorSummary | None = None
    replies: list["CommunityComment"] = field(default_factory=list)


@dataclass
class CommunityPost:
    """Domain entity for a community board post.

    ``like_count`` and ``comment_count`` are denormalized counters kept equal
    to the number of like and comment rows by the community service.
    """

    title: str
    content: str
    author_id: int
    is_published: bool = True
    like_count: int = 0
    comment_count: int = 0
    view_count: int = 0
    media: list[CommunityMedia] = field(default_factory=list)
    id: int | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)
    author: AuthorSummary | None = None
    comments: list[CommunityComment] = field(default_factory=list)


def build_comment_tree(comments: list[CommunityComment]) -> list[CommunityComment]:
    """Nest a flat, oldest-first comment list under their parents.

    Comments whose parent is missing from the list are treated as top-level.
    """
    by_id = {c.id: c for c in comments}
    roots: list[CommunityComment] = []
    for comment in comments:
        comment.replies = []
    for comment in comments:
        parent = by_id.get(comment.parent_id) if comment.parent_id else None
        if parent is not None and parent is not comment:
            parent.replies.append(comment)
        else:
            roots.append(comment)
    return roots
