"""Shared API dependencies.

The mutating endpoints run an ordered pipeline of dependencies: the bearer
check first, then the image upload stage (which depends on the bearer check),
then the handler. A failing stage raises and nothing after it runs.
"""

import logging
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, File, Form, HTTPException, Request, UploadFile, status
from fastapi.concurrency import run_in_threadpool
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from pydantic import ValidationError
from sqlalchemy.orm import Session
from starlette.datastructures import UploadFile as StarletteUploadFile

from postboard.core.errors import ImageStorageError, UploadRejectedError
from postboard.core.security import AuthContext, decode_access_token
from postboard.core.settings import settings
from postboard.db.session import get_db
from postboard.repositories.post_repo import PostRepository
from postboard.schemas.post import PostUpdate
from postboard.services.uploads import ImageStore, accept_upload, build_image_url

logger = logging.getLogger(__name__)

# Missing credentials are reported by get_current_user, not by the scheme itself.
bearer_scheme = HTTPBearer(auto_error=False)

AUTH_FAILED = "Auth failed!"
INVALID_MIME_TYPE = "Invalid mime type!"
INVALID_POST_DATA = "Invalid post data"
UPLOAD_FAILED = "Image upload failed!"

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_post_repository(db: SessionDep) -> PostRepository:
    """Return a repository bound to the request's session."""
    return PostRepository(db)


def get_image_store() -> ImageStore:
    """Return blob storage for uploaded images."""
    return ImageStore(settings.images_dir)


PostRepositoryDep = Annotated[PostRepository, Depends(get_post_repository)]
ImageStoreDep = Annotated[ImageStore, Depends(get_image_store)]


def _auth_failed() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=AUTH_FAILED,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> AuthContext:
    """Resolve the caller's identity from the bearer token.

    Raises:
        HTTPException: 401 if the header is missing or the token does not verify.
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise _auth_failed()
    try:
        return decode_access_token(credentials.credentials)
    except JWTError as err:
        logger.info("Bearer token rejected: %s", err)
        raise _auth_failed() from err


# Type alias for current user dependency
CurrentUserDep = Annotated[AuthContext, Depends(get_current_user)]


def public_base_url(request: Request) -> str:
    """Return the scheme and host uploaded images are served from."""
    return settings.public_base_url or str(request.base_url)


async def _store_upload(request: Request, image: StarletteUploadFile, store: ImageStore) -> str:
    """Run the upload pipeline for ``image`` and return its public URL."""
    data = await image.read()
    try:
        # Validation and the file write are blocking; keep them off the event loop.
        stored = await run_in_threadpool(
            accept_upload,
            original_name=image.filename,
            mime_type=image.content_type,
            data=data,
            store=store,
            max_bytes=settings.max_image_bytes,
        )
    except UploadRejectedError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=INVALID_MIME_TYPE,
        ) from exc
    except ImageStorageError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=UPLOAD_FAILED,
        ) from exc
    return build_image_url(public_base_url(request), settings.images_mount_path, stored.filename)


@dataclass(frozen=True)
class CreateInput:
    """Form fields for a new post plus the URL of its stored image."""

    title: str
    content: str
    image_path: str


async def read_create_input(
    request: Request,
    _auth: CurrentUserDep,
    store: ImageStoreDep,
    title: Annotated[str, Form(min_length=1)],
    image: Annotated[UploadFile, File(description="Image attached to the post")],
    content: Annotated[str, Form()] = "",
) -> CreateInput:
    """Upload stage for create: the image is mandatory.

    FastAPI validates the form fields before calling this, so an invalid
    title never leaves a stored image behind.
    """
    if not title.strip():
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=INVALID_POST_DATA,
        )
    image_path = await _store_upload(request, image, store)
    return CreateInput(title=title, content=content, image_path=image_path)


CreateInputDep = Annotated[CreateInput, Depends(read_create_input)]


@dataclass(frozen=True)
class UpdateInput:
    """Validated update fields plus the image URL to store, if any."""

    fields: PostUpdate
    image_path: str | None


async def read_update_input(
    request: Request,
    _auth: CurrentUserDep,
    store: ImageStoreDep,
) -> UpdateInput:
    """Upload stage for update.

    Accepts a JSON body or multipart form. A new ``image`` file replaces the
    stored image; otherwise an echoed ``imagePath`` is kept only when
    ``TRUST_CLIENT_IMAGE_PATH`` is enabled.
    """
    content_type = request.headers.get("content-type", "")
    image: StarletteUploadFile | None = None
    if content_type.startswith("application/json"):
        try:
            raw = await request.json()
        except ValueError as exc:  # JSONDecodeError or a non-UTF-8 body
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="Malformed JSON body",
            ) from exc
        if not isinstance(raw, dict):
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="Expected a JSON object",
            )
    else:
        form = await request.form()
        raw = {key: value for key, value in form.items() if isinstance(value, str)}
        candidate = form.get("image")
        if isinstance(candidate, StarletteUploadFile):
            image = candidate

    try:
        fields = PostUpdate.model_validate(raw)
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=INVALID_POST_DATA,
        ) from exc

    if image is not None and image.filename:
        image_path: str | None = await _store_upload(request, image, store)
    elif settings.trust_client_image_path and fields.image_path:
        image_path = fields.image_path
    else:
        image_path = None
    return UpdateInput(fields=fields, image_path=image_path)


UpdateInputDep = Annotated[UpdateInput, Depends(read_update_input)]
