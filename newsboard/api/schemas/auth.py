"""Authentication request and response models."""

from pydantic import BaseModel, Field


class Credentials(BaseModel):
    """Signup or login request."""

    username: str = Field(min_length=3, max_length=31, pattern=r"^[A-Za-z0-9_]+$")
    password: str = Field(min_length=3, max_length=255)


class TokenResponse(BaseModel):
    """Issued access token."""

    access_token: str
    token_type: str = "bearer"
    user_id: int
    username: str


class UserInfoResponse(BaseModel):
    """Current user info response."""

    id: int
    username: str
