# tests/conftest.py
from __future__ import annotations

import os
import tempfile
from collections.abc import Callable, Generator, Iterator
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")
os.environ.setdefault("IMAGES_DIR", os.path.join(tempfile.gettempdir(), "postboard-test-images"))

from postboard.api.v1.dependencies import get_image_store
from postboard.core.security import create_access_token
from postboard.db.session import Base
from postboard.db.session import get_db as app_get_session
from postboard.main import app as fastapi_app
from postboard.models import Post
from postboard.repositories.post_repo import PostRepository
from postboard.services.uploads import ImageStore

TEST_DB_URL = "sqlite://"


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    # Endpoints commit and roll back for real, so each test gets its own
    # in-memory database instead of a wrapping transaction.
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture()
def image_store(tmp_path: Path) -> ImageStore:
    """Blob storage rooted in a per-test directory."""
    return ImageStore(tmp_path / "images")


@pytest.fixture(autouse=True)
def override_dependencies(
    app: FastAPI, db_session: Session, image_store: ImageStore
) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    app.dependency_overrides[get_image_store] = lambda: image_store
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)
        app.dependency_overrides.pop(get_image_store, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def repo(db_session: Session) -> PostRepository:
    return PostRepository(db_session)


@pytest.fixture()
def auth_token() -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    token = create_access_token("user-alice", email="alice@example.com")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def other_auth_token() -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    token = create_access_token("user-bob", email="bob@example.com")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def make_post(db_session: Session) -> Callable[..., Post]:
    """Return a factory that inserts posts directly through the session."""

    def _make_post(
        title: str = "Test post",
        content: str = "Test post content",
        creator: str = "user-alice",
        image_path: str = "http://test/images/test-post-1700000000000.png",
    ) -> Post:
        post = Post(title=title, content=content, creator=creator, image_path=image_path)
        db_session.add(post)
        db_session.commit()
        db_session.refresh(post)
        return post

    return _make_post


@pytest.fixture()
def test_post(make_post: Callable[..., Post]) -> Post:
    """Create a baseline post owned by the primary test user."""
    return make_post()
