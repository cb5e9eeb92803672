"""OAuth2 client and token models."""

from datetime import datetime
from typing import Any

from pydantic import Field

from .base import PolarModel, PolarRequest


class OAuth2Client(PolarModel):
    client_id: str
    client_secret: str | None = None
    client_name: str
    redirect_uris: list[str] = Field(default_factory=list)
    scope: str | None = None
    token_endpoint_auth_method: str | None = None
    grant_types: list[str] = Field(default_factory=list)
    response_types: list[str] = Field(default_factory=list)
    client_uri: str | None = None
    logo_uri: str | None = None
    client_id_issued_at: int | None = None
    client_secret_expires_at: int | None = None
    created_at: datetime | None = None
    modified_at: datetime | None = None


class OAuth2ClientCreate(PolarRequest):
    client_name: str = Field(min_length=1)
    redirect_uris: list[str] = Field(min_length=1)
    scope: str | None = None
    token_endpoint_auth_method: str | None = "client_secret_post"
    grant_types: list[str] | None = None
    response_types: list[str] | None = None
    client_uri: str | None = None
    logo_uri: str | None = None


class OAuth2ClientUpdate(PolarRequest):
    client_id: str
    client_name: str | None = None
    redirect_uris: list[str] | None = None
    scope: str | None = None
    token_endpoint_auth_method: str | None = None
    client_uri: str | None = None
    logo_uri: str | None = None


class OAuth2Token(PolarModel):
    access_token: str
    token_type: str = "Bearer"
    expires_in: int | None = None
    refresh_token: str | None = None
    scope: str | None = None
    id_token: str | None = None


class OAuth2TokenRequest(PolarRequest):
    """Form body for POST /v1/oauth2/token."""

    grant_type: str = "authorization_code"
    client_id: str
    client_secret: str
    code: str | None = None
    redirect_uri: str | None = None
    refresh_token: str | None = None
    scope: str | None = None


class OAuth2TokenIntrospection(PolarModel):
    active: bool
    client_id: str | None = None
    token_type: str | None = None
    scope: str | None = None
    sub_type: str | None = None
    sub: str | None = None
    aud: str | None = None
    iss: str | None = None
    exp: int | None = None
    iat: int | None = None


class OAuth2UserInfo(PolarModel):
    sub: str
    name: str | None = None
    email: str | None = None
    email_verified: bool | None = None
    extra: dict[str, Any] = Field(default_factory=dict)
