"""Authentication-related request and response schemas."""

from pydantic import BaseModel

from storefront.schemas.base import CamelModel


class LoginRequest(BaseModel):
    """Payload for admin login."""

    email: str
    password: str


class TokenResponse(BaseModel):
    """JWT response payload."""

    access_token: str
    token_type: str = "bearer"


class AdminUser(CamelModel):
    """Authenticated admin session identity."""

    email: str
    uid: str
    is_anonymous: bool = False
