"""Service-level operations behind the post endpoints.

Each function performs one request's worth of store access. Authentication
and upload handling happen before these are called; transaction commit and
rollback are left to the caller.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from postboard.core.errors import PostNotAuthorizedError
from postboard.models.post import Post
from postboard.repositories.post_repo import PostRepository
from postboard.services.ownership import scope
from postboard.services.pagination import build_page_window

logger = logging.getLogger(__name__)

__all__ = [
    "PostPage",
    "create_post",
    "delete_post",
    "get_post",
    "list_posts",
    "update_post",
]


@dataclass(frozen=True)
class PostPage:
    """A slice of posts together with the size of the full collection."""

    posts: list[Post]
    max_posts: int


def list_posts(
    repo: PostRepository,
    page: str | int | None = None,
    page_size: str | int | None = None,
) -> PostPage:
    """Fetch one page of posts, or all of them when paging is disabled.

    The total count always covers the whole collection, not the slice.
    """
    window = build_page_window(page, page_size)
    posts = repo.list_page(window)
    return PostPage(posts=posts, max_posts=repo.count())


def get_post(repo: PostRepository, post_id: str) -> Post | None:
    """Return the post with ``post_id``, or None if there is none."""
    return repo.get_by_id(post_id)


def create_post(
    repo: PostRepository,
    *,
    title: str,
    content: str,
    image_path: str,
    creator: str,
) -> Post:
    """Insert a post owned by ``creator``.

    Args:
        repo: Repository used to persist the post.
        title: Non-empty post title.
        content: Post body.
        image_path: URL of an image already written by the upload pipeline.
        creator: Authenticated subject creating the post.

    Returns:
        The persisted post with its store-assigned id.
    """
    post = repo.create(title=title, content=content, image_path=image_path, creator=creator)
    logger.info("Created post %s for %s", post.id, creator)
    return post


def update_post(
    repo: PostRepository,
    *,
    post_id: str,
    subject_id: str,
    title: str,
    content: str,
    image_path: str | None = None,
) -> None:
    """Overwrite title and content of a post the caller created.

    ``image_path`` replaces the stored image URL when given; when None the
    stored value is kept. The creator column is never written.

    Raises:
        PostNotAuthorizedError: If no post with ``post_id`` is owned by ``subject_id``.
    """
    values: dict[str, Any] = {"title": title, "content": content}
    if image_path is not None:
        values["image_path"] = image_path

    if repo.update_owned(scope(subject_id, post_id), values) == 0:
        logger.warning("Rejected update of post %s by %s", post_id, subject_id)
        raise PostNotAuthorizedError(post_id)
    logger.info("Updated post %s", post_id)


def delete_post(repo: PostRepository, *, post_id: str, subject_id: str) -> None:
    """Delete a post the caller created.

    Raises:
        PostNotAuthorizedError: If no post with ``post_id`` is owned by ``subject_id``.
    """
    if repo.delete_owned(scope(subject_id, post_id)) == 0:
        logger.warning("Rejected delete of post %s by %s", post_id, subject_id)
        raise PostNotAuthorizedError(post_id)
    logger.info("Deleted post %s", post_id)
