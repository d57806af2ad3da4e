# src/postboard/api/v1/endpoints/posts.py
"""Post-related endpoints for the Postboard API."""

import logging

from fastapi import APIRouter, HTTPException, Query, Response, status
from sqlalchemy.exc import SQLAlchemyError

from postboard.api.v1.dependencies import (
    CreateInputDep,
    CurrentUserDep,
    PostRepositoryDep,
    UpdateInputDep,
)
from postboard.core.errors import PostNotAuthorizedError
from postboard.schemas.post import (
    MessageResponse,
    PostDetailResponse,
    PostListResponse,
    PostOut,
)
from postboard.services import post_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["posts"])

NOT_AUTHORIZED = "Not authorized"


def _server_error(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)


@router.get("", response_model=PostListResponse)
def list_posts(
    repo: PostRepositoryDep,
    page: str | None = Query(None, description="1-based page number"),
    pagesize: str | None = Query(None, description="Posts per page"),
) -> PostListResponse:
    """List posts, one page at a time when both paging parameters are valid.

    Args:
        repo: Post repository bound to the request session
        page: Page number; missing or invalid values disable paging
        pagesize: Page size; missing or invalid values disable paging

    Returns:
        The selected posts and the total number of posts
    """
    try:
        result = post_service.list_posts(repo, page, pagesize)
    except SQLAlchemyError as exc:
        logger.error("Listing posts failed", exc_info=True)
        raise _server_error("Fetching posts failed!") from exc

    return PostListResponse(
        message="Posts fetched successfully!",
        posts=[PostOut.model_validate(post) for post in result.posts],
        max_posts=result.max_posts,
    )


@router.get(
    "/{post_id}",
    response_model=PostDetailResponse,
    responses={status.HTTP_204_NO_CONTENT: {"description": "Post not found"}},
)
def get_post(post_id: str, repo: PostRepositoryDep) -> PostDetailResponse | Response:
    """Get a specific post by ID.

    A missing post is answered with 204 and no body rather than an error.
    """
    try:
        post = post_service.get_post(repo, post_id)
    except SQLAlchemyError as exc:
        logger.error("Fetching post %s failed", post_id, exc_info=True)
        raise _server_error("Fetching a post failed!") from exc

    if post is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return PostDetailResponse(message="Post fetched successfully!", post=PostOut.model_validate(post))


@router.post("", response_model=PostDetailResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    current_user: CurrentUserDep,
    payload: CreateInputDep,
    repo: PostRepositoryDep,
) -> PostDetailResponse:
    """Create a post owned by the authenticated caller.

    The image has already been validated and stored by the time this runs.
    """
    try:
        post = post_service.create_post(
            repo,
            title=payload.title,
            content=payload.content,
            image_path=payload.image_path,
            creator=current_user.user_id,
        )
        repo.session.commit()
    except SQLAlchemyError as exc:
        repo.session.rollback()
        logger.error("Creating post failed", exc_info=True)
        raise _server_error("Creating a post failed!") from exc

    return PostDetailResponse(message="Post added successfully!", post=PostOut.model_validate(post))


@router.put("/{post_id}", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def update_post(
    post_id: str,
    current_user: CurrentUserDep,
    payload: UpdateInputDep,
    repo: PostRepositoryDep,
) -> MessageResponse:
    """Overwrite a post the caller created.

    Raises:
        HTTPException: 401 if the post does not exist or belongs to someone else
    """
    try:
        post_service.update_post(
            repo,
            post_id=post_id,
            subject_id=current_user.user_id,
            title=payload.fields.title,
            content=payload.fields.content,
            image_path=payload.image_path,
        )
        repo.session.commit()
    except PostNotAuthorizedError as exc:
        repo.session.rollback()
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=NOT_AUTHORIZED) from exc
    except SQLAlchemyError as exc:
        repo.session.rollback()
        logger.error("Updating post %s failed", post_id, exc_info=True)
        raise _server_error("Updating a post failed!") from exc

    return MessageResponse(message="Post updated successfully!")


@router.delete("/{post_id}", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def delete_post(
    post_id: str,
    current_user: CurrentUserDep,
    repo: PostRepositoryDep,
) -> MessageResponse:
    """Delete a post the caller created.

    Raises:
        HTTPException: 401 if the post does not exist or belongs to someone else
    """
    try:
        post_service.delete_post(repo, post_id=post_id, subject_id=current_user.user_id)
        repo.session.commit()
    except PostNotAuthorizedError as exc:
        repo.session.rollback()
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=NOT_AUTHORIZED) from exc
    except SQLAlchemyError as exc:
        repo.session.rollback()
        logger.error("Deleting post %s failed", post_id, exc_info=True)
        raise _server_error("Deleting a post failed!") from exc

    return MessageResponse(message="Post deleted successfully!")
