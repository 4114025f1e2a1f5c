"""Post request and response models."""

from pydantic import BaseModel, Field, HttpUrl, TypeAdapter, field_validator, model_validator

from newsboard.api.schemas.common import AuthorResponse, isoformat_utc
from newsboard.domain.views import PostView

_http_url = TypeAdapter(HttpUrl)


class PostCreate(BaseModel):
    """Create post request.

    The url is checked as http(s) but stored exactly as submitted, so the
    `site` listing filter matches what the author typed.
    """

    title: str = Field(min_length=3, max_length=100)
    url: str | None = None
    content: str | None = None

    @field_validator("url")
    @classmethod
    def check_http_url(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        try:
            _http_url.validate_python(value)
        except ValueError as e:
            raise ValueError("url must be an http or https URL") from e
        return value

    @model_validator(mode="after")
    def require_url_or_content(self) -> "PostCreate":
        if not self.url and not (self.content and self.content.strip()):
            raise ValueError("Either url or content must be provided")
        return self


class PostCreatedResponse(BaseModel):
    """Create post response."""

    post_id: int


class PostResponse(BaseModel):
    """Post with author and the viewer's upvote state."""

    id: int
    title: str
    url: str | None
    content: str | None
    points: int
    comment_count: int
    created_at: str | None
    author: AuthorResponse
    is_upvoted: bool

    @classmethod
    def from_view(cls, view: PostView) -> "PostResponse":
        post = view.post
        return cls(
            id=post.id,
            title=post.title,
            url=post.url,
            content=post.content,
            points=post.points,
            comment_count=post.comment_count,
            created_at=isoformat_utc(post.created_at),
            author=AuthorResponse(id=post.author_id, username=view.author_username),
            is_upvoted=view.is_upvoted,
        )
