# src/postboard/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .post import MessageResponse, PostDetailResponse, PostListResponse, PostOut, PostUpdate

__all__ = [
    "MessageResponse",
    "PostDetailResponse",
    "PostListResponse",
    "PostOut",
    "PostUpdate",
]
