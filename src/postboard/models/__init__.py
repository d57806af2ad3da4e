# src/postboard/models/__init__.py
"""SQLAlchemy models for the Postboard application."""

from .post import Post

__all__ = ["Post"]
