"""Post-related Pydantic schemas.

Field names are snake_case in Python; the JSON keys clients see (`imagePath`,
`maxPosts`) are aliases, and either spelling is accepted on input.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class PostOut(BaseModel):
    """Schema for post information returned by the API."""

    id: str
    title: str
    content: str
    image_path: str = Field(alias="imagePath")
    creator: str

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class PostUpdate(BaseModel):
    """Fields accepted by the update endpoint, from either JSON or a form."""

    title: str = Field(..., min_length=1, description="Post title")
    content: str = Field("", description="Post body")
    # Accepted for compatibility with clients that echo the whole post; never applied.
    creator: str | None = Field(None, description="Ignored, the creator is immutable")
    image_path: str | None = Field(
        None,
        validation_alias=AliasChoices("imagePath", "image_path"),
        description="Previously stored image URL echoed back by the client",
    )

    model_config = ConfigDict(extra="ignore")

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title must not be blank")
        return value


class MessageResponse(BaseModel):
    """Bare acknowledgement used by update and delete."""

    message: str


class PostListResponse(MessageResponse):
    """One page of posts plus the size of the whole collection."""

    posts: list[PostOut]
    max_posts: int = Field(alias="maxPosts")

    model_config = ConfigDict(populate_by_name=True)


class PostDetailResponse(MessageResponse):
    """A single post, returned by fetch and create."""

    post: PostOut
