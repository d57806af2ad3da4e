"""Validation, naming and storage of uploaded post images.

An upload passes through three steps, each of which can fail and stop the
request before any post row is written:

1. ``classify`` maps the declared content type to a file extension.
2. ``build_filename`` derives a URL-safe name from the client filename and
   the upload time.
3. ``ImageStore.save`` writes the bytes under that name.
"""

from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass
from pathlib import Path

from postboard.core.errors import ImageStorageError, ImageTooLargeError, UnsupportedImageTypeError

logger = logging.getLogger(__name__)

__all__ = [
    "MIME_TYPE_MAP",
    "ImageStore",
    "StoredImage",
    "accept_upload",
    "build_filename",
    "build_image_url",
    "classify",
    "normalize_name",
]

MIME_TYPE_MAP: dict[str, str] = {
    "image/png": "png",
    "image/jpg": "jpg",
    "image/jpeg": "jpg",
}

_WHITESPACE = re.compile(r"\s+")
_UNSAFE = re.compile(r"[^a-z0-9._-]+")


@dataclass(frozen=True)
class StoredImage:
    """An image accepted by the pipeline and persisted to blob storage."""

    filename: str
    extension: str
    timestamp_ms: int


def classify(mime_type: str | None) -> str:
    """Return the file extension for an accepted image content type.

    Raises:
        UnsupportedImageTypeError: If the type is not in ``MIME_TYPE_MAP``.
    """
    extension = MIME_TYPE_MAP.get((mime_type or "").lower())
    if extension is None:
        raise UnsupportedImageTypeError(mime_type)
    return extension


def normalize_name(original_name: str | None) -> str:
    """Lower-case a client filename and join its words with ``-``.

    Only ``a-z``, digits, ``.``, ``_`` and ``-`` survive, so the result can be
    used in a URL path without escaping.
    """
    name = _WHITESPACE.sub("-", (original_name or "").strip().lower())
    name = _UNSAFE.sub("", name)
    return name or "image"


def build_filename(original_name: str | None, extension: str, timestamp_ms: int) -> str:
    """Return ``<normalized name>-<timestamp>.<extension>``."""
    return f"{normalize_name(original_name)}-{timestamp_ms}.{extension}"


def build_image_url(base_url: str, mount_path: str, filename: str) -> str:
    """Join the serving host, the static mount and the stored filename."""
    return f"{base_url.rstrip('/')}/{mount_path.strip('/')}/{filename}"


class ImageStore:
    """Blob storage backed by a local directory served as static files."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def save(self, filename: str, data: bytes) -> str:
        """Write ``data`` under ``filename`` and return the stored name.

        Raises:
            ImageStorageError: If the file could not be written.
        """
        target = self.root / filename
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as exc:
            logger.error("Failed to store image %s", target, exc_info=True)
            raise ImageStorageError(f"Could not store image {filename}") from exc
        return filename


def accept_upload(
    *,
    original_name: str | None,
    mime_type: str | None,
    data: bytes,
    store: ImageStore,
    max_bytes: int | None = None,
    now_ms: int | None = None,
) -> StoredImage:
    """Validate, name and persist one uploaded image.

    Nothing is written when validation fails.

    Args:
        original_name: Filename supplied by the client.
        mime_type: Content type declared by the client.
        data: Raw file bytes.
        store: Blob storage to write into.
        max_bytes: Optional size limit.
        now_ms: Upload time in epoch milliseconds; defaults to the current time.

    Raises:
        UnsupportedImageTypeError: The content type is not accepted.
        ImageTooLargeError: ``data`` is larger than ``max_bytes``.
        ImageStorageError: The store could not write the file.
    """
    try:
        extension = classify(mime_type)
    except UnsupportedImageTypeError:
        logger.warning("Rejected upload %r with mime type %r", original_name, mime_type)
        raise

    if max_bytes is not None and len(data) > max_bytes:
        logger.warning("Rejected upload %r of %d bytes", original_name, len(data))
        raise ImageTooLargeError(len(data), max_bytes)

    timestamp_ms = now_ms if now_ms is not None else int(time.time() * 1000)
    filename = build_filename(original_name, extension, timestamp_ms)
    store.save(filename, data)
    logger.debug("Stored image %s (%d bytes)", filename, len(data))
    return StoredImage(filename=filename, extension=extension, timestamp_ms=timestamp_ms)
