"""Creator-scoped filters for post mutations."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.sql import ColumnElement

from postboard.models.post import Post

__all__ = ["OwnershipFilter", "scope"]


@dataclass(frozen=True)
class OwnershipFilter:
    """Match exactly one post, and only if ``creator`` owns it."""

    post_id: str
    creator: str

    def criteria(self) -> tuple[ColumnElement[bool], ...]:
        """Return the WHERE clauses for an UPDATE or DELETE on ``post``."""
        return (Post.id == self.post_id, Post.creator == self.creator)


def scope(subject_id: str, post_id: str) -> OwnershipFilter:
    """Build the filter used by both update and delete."""
    return OwnershipFilter(post_id=post_id, creator=subject_id)
