"""OAuth2 clients and token endpoints."""

from ..errors import PolarValidationError
from ..models.oauth2 import (
    OAuth2Client,
    OAuth2ClientCreate,
    OAuth2ClientUpdate,
    OAuth2Token,
    OAuth2TokenIntrospection,
    OAuth2TokenRequest,
    OAuth2UserInfo,
)
from ..result import PolarResult
from .base import BaseResource, Payload, segment


class OAuth2Resource(BaseResource):
    """
    OAuth2 client registration and token endpoints.

    Token, revoke and introspect requests are form-encoded with the client
    credentials in the body (client_secret_post).
    """

    def create_client(self, data: Payload, timeout: float | None = None) -> PolarResult[OAuth2Client]:
        return self._send("POST", "oauth2/register", data, OAuth2ClientCreate, OAuth2Client, timeout)

    def get_client(self, client_id: str, timeout: float | None = None) -> PolarResult[OAuth2Client]:
        if error := self._require(client_id=client_id):
            return PolarResult.fail(error)
        return self._get(f"oauth2/register/{segment(client_id)}", OAuth2Client, timeout=timeout)

    def update_client(self, client_id: str, data: Payload, timeout: float | None = None) -> PolarResult[OAuth2Client]:
        if error := self._require(client_id=client_id):
            return PolarResult.fail(error)
        if isinstance(data, dict) and "client_id" not in data:
            data = {**data, "client_id": client_id}
        return self._send(
            "PUT", f"oauth2/register/{segment(client_id)}", data, OAuth2ClientUpdate, OAuth2Client, timeout
        )

    def delete_client(self, client_id: str, timeout: float | None = None) -> PolarResult[None]:
        if error := self._require(client_id=client_id):
            return PolarResult.fail(error)
        return self._delete(f"oauth2/register/{segment(client_id)}", timeout=timeout)

    def request_token(self, data: Payload, timeout: float | None = None) -> PolarResult[OAuth2Token]:
        """Exchange an authorization code or refresh token for an access token."""
        try:
            body = self._payload(data, OAuth2TokenRequest)
        except PolarValidationError as e:
            return PolarResult.fail(e)
        if body["grant_type"] == "authorization_code" and not body.get("code"):
            return PolarResult.fail(PolarValidationError("code is required for authorization_code", status_code=None))
        if body["grant_type"] == "refresh_token" and not body.get("refresh_token"):
            return PolarResult.fail(PolarValidationError("refresh_token is required for refresh_token", status_code=None))
        return self._request("POST", "oauth2/token", form=body, parse=OAuth2Token.model_validate, timeout=timeout)

    def revoke_token(
        self,
        token: str,
        client_id: str,
        client_secret: str,
        token_type_hint: str | None = None,
        timeout: float | None = None,
    ) -> PolarResult[None]:
        if error := self._require(token=token, client_id=client_id, client_secret=client_secret):
            return PolarResult.fail(error)
        body = {"token": token, "client_id": client_id, "client_secret": client_secret}
        if token_type_hint:
            body["token_type_hint"] = token_type_hint
        return self._request("POST", "oauth2/revoke", form=body, timeout=timeout).map(lambda _: None)

    def introspect_token(
        self,
        token: str,
        client_id: str,
        client_secret: str,
        token_type_hint: str | None = None,
        timeout: float | None = None,
    ) -> PolarResult[OAuth2TokenIntrospection]:
        if error := self._require(token=token, client_id=client_id, client_secret=client_secret):
            return PolarResult.fail(error)
        body = {"token": token, "client_id": client_id, "client_secret": client_secret}
        if token_type_hint:
            body["token_type_hint"] = token_type_hint
        return self._request(
            "POST", "oauth2/introspect", form=body, parse=OAuth2TokenIntrospection.model_validate, timeout=timeout
        )

    def get_user_info(self, timeout: float | None = None) -> PolarResult[OAuth2UserInfo]:
        """Claims about the subject of the client's access token."""
        return self._request("GET", "oauth2/userinfo", parse=_parse_user_info, timeout=timeout)


def _parse_user_info(data: dict) -> OAuth2UserInfo:
    if not isinstance(data, dict):
        return OAuth2UserInfo.model_validate(data)
    known = set(OAuth2UserInfo.model_fields) - {"extra"}
    extra = {k: v for k, v in data.items() if k not in known}
    return OAuth2UserInfo.model_validate({**data, "extra": extra})
