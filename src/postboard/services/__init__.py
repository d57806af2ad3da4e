# src/postboard/services/__init__.py
"""Business logic services for the Postboard application."""

from .ownership import OwnershipFilter, scope
from .pagination import PageWindow, build_page_window
from .uploads import ImageStore, StoredImage, accept_upload

__all__ = [
    "ImageStore",
    "OwnershipFilter",
    "PageWindow",
    "StoredImage",
    "accept_upload",
    "build_page_window",
    "scope",
]
