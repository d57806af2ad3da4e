# src/postboard/models/post.py
"""SQLAlchemy model for posts."""

import uuid

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from postboard.db.session import Base


def _new_post_id() -> str:
    return uuid.uuid4().hex


class Post(Base):
    """A titled text entry with an attached image, owned by its creator.

    `creator` is written once at insert time and is the only key used to
    authorize updates and deletes.
    """

    __tablename__ = "post"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_post_id)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    # Absolute URL built from a name produced by the upload namer.
    image_path: Mapped[str] = mapped_column(Text, nullable=False)
    creator: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
