"""Tests for the post service functions."""

import pytest

from postboard.core.errors import PostNotAuthorizedError
from postboard.models import Post
from postboard.services import post_service


def _reload(db_session, post_id):
    db_session.expire_all()
    return db_session.get(Post, post_id)


def test_list_posts_counts_whole_collection(repo, make_post):
    for index in range(5):
        make_post(title=f"Post {index}")

    page = post_service.list_posts(repo, page=1, page_size=2)

    assert len(page.posts) == 2
    assert page.max_posts == 5


def test_list_posts_without_paging(repo, make_post):
    for index in range(3):
        make_post(title=f"Post {index}")

    page = post_service.list_posts(repo)

    assert len(page.posts) == 3
    assert page.max_posts == 3


def test_get_post_missing_returns_none(repo):
    assert post_service.get_post(repo, "nope") is None


def test_create_post_records_creator(repo, db_session):
    post = post_service.create_post(
        repo,
        title="Title",
        content="Body",
        image_path="http://test/images/a-1.png",
        creator="user-1",
    )
    db_session.commit()

    stored = _reload(db_session, post.id)
    assert stored.creator == "user-1"
    assert stored.image_path == "http://test/images/a-1.png"
    assert len(post.id) == 32


def test_update_post_keeps_image_when_none(repo, make_post, db_session):
    post = make_post(creator="user-1")

    post_service.update_post(
        repo, post_id=post.id, subject_id="user-1", title="New", content="Changed"
    )
    db_session.commit()

    stored = _reload(db_session, post.id)
    assert (stored.title, stored.content) == ("New", "Changed")
    assert stored.image_path == post.image_path
    assert stored.creator == "user-1"


def test_update_post_replaces_image(repo, make_post, db_session):
    post = make_post(creator="user-1")

    post_service.update_post(
        repo,
        post_id=post.id,
        subject_id="user-1",
        title="t",
        content="c",
        image_path="http://test/images/new-2.png",
    )
    db_session.commit()

    assert _reload(db_session, post.id).image_path == "http://test/images/new-2.png"


def test_update_post_by_other_subject(repo, make_post, db_session):
    post = make_post(creator="user-1", title="Original")

    with pytest.raises(PostNotAuthorizedError) as exc_info:
        post_service.update_post(repo, post_id=post.id, subject_id="user-2", title="x", content="y")

    assert exc_info.value.post_id == post.id
    assert _reload(db_session, post.id).title == "Original"


def test_delete_post(repo, make_post, db_session):
    post = make_post(creator="user-1")
    other = make_post(creator="user-1")

    post_service.delete_post(repo, post_id=post.id, subject_id="user-1")
    db_session.commit()

    assert _reload(db_session, post.id) is None
    assert _reload(db_session, other.id) is not None


def test_delete_missing_or_foreign_post(repo, make_post):
    post = make_post(creator="user-1")

    with pytest.raises(PostNotAuthorizedError):
        post_service.delete_post(repo, post_id=post.id, subject_id="user-2")
    with pytest.raises(PostNotAuthorizedError):
        post_service.delete_post(repo, post_id="missing", subject_id="user-1")
