"""Data access helpers for working with posts."""
from __future__ import annotations

from typing import Any

from sqlalchemy import delete, func, select, update
from sqlalchemy.orm import Session

from postboard.models.post import Post
from postboard.services.ownership import OwnershipFilter
from postboard.services.pagination import PageWindow

__all__ = ["PostRepository"]


class PostRepository:
    """Thin wrapper around database access for post entities.

    Writes are flushed but not committed; the caller owns the transaction.
    """

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, post_id: str) -> Post | None:
        """Return a post by identifier."""
        return self.session.get(Post, post_id)

    def list_page(self, window: PageWindow | None = None) -> list[Post]:
        """Return posts in store order, optionally restricted to ``window``."""
        stmt = select(Post)
        if window is not None:
            stmt = stmt.offset(window.skip).limit(window.limit)
        return list(self.session.scalars(stmt))

    def count(self) -> int:
        """Return the number of posts in the whole collection."""
        return int(self.session.scalar(select(func.count()).select_from(Post)) or 0)

    def create(self, *, title: str, content: str, image_path: str, creator: str) -> Post:
        """Insert a new post and return the persisted ORM instance."""
        post = Post(title=title, content=content, image_path=image_path, creator=creator)
        self.session.add(post)
        self.session.flush()
        return post

    def update_owned(self, owner_filter: OwnershipFilter, values: dict[str, Any]) -> int:
        """Apply ``values`` to the post matched by ``owner_filter``.

        Returns:
            The number of rows matched (0 or 1).
        """
        result = self.session.execute(
            update(Post)
            .where(*owner_filter.criteria())
            .values(**values)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount

    def delete_owned(self, owner_filter: OwnershipFilter) -> int:
        """Delete the post matched by ``owner_filter`` and return the rows removed."""
        result = self.session.execute(
            delete(Post)
            .where(*owner_filter.criteria())
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount
