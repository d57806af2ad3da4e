"""Tests for creator-scoped mutation filters."""

from postboard.models import Post
from postboard.services.ownership import OwnershipFilter, scope


def test_scope_pairs_post_and_subject():
    assert scope("user-1", "post-9") == OwnershipFilter(post_id="post-9", creator="user-1")


def test_criteria_match_only_the_owners_post(repo, make_post, db_session):
    mine = make_post(creator="user-1")
    theirs = make_post(creator="user-2")

    matched = db_session.query(Post).filter(*scope("user-1", mine.id).criteria()).all()
    assert [post.id for post in matched] == [mine.id]

    assert db_session.query(Post).filter(*scope("user-1", theirs.id).criteria()).count() == 0
    assert db_session.query(Post).filter(*scope("user-1", "missing").criteria()).count() == 0
