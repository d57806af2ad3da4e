"""Domain errors raised by the post services.

Endpoints translate these into HTTP responses; nothing below the API layer
knows about status codes.
"""

from __future__ import annotations


class PostboardError(Exception):
    """Base class for all expected service failures."""


class UploadRejectedError(PostboardError):
    """An uploaded image failed validation before anything was written."""


class UnsupportedImageTypeError(UploadRejectedError):
    """The declared content type is not one of the accepted image types."""

    def __init__(self, mime_type: str | None) -> None:
        super().__init__(f"Invalid mime type: {mime_type!r}")
        self.mime_type = mime_type


class ImageTooLargeError(UploadRejectedError):
    """The uploaded image exceeds the configured size limit."""

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"Image of {size} bytes exceeds the {limit} byte limit")
        self.size = size
        self.limit = limit


class ImageStorageError(PostboardError):
    """Writing the image to blob storage failed."""


class PostNotAuthorizedError(PostboardError):
    """A creator-scoped mutation matched no post.

    Raised both when the post does not exist and when the caller is not its
    creator; the two cases are never distinguished.
    """

    def __init__(self, post_id: str) -> None:
        super().__init__(f"Not authorized to modify post {post_id}")
        self.post_id = post_id
