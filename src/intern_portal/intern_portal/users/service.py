from __future__ import annotations

import hmac
from typing import Optional

from werkzeug.security import check_password_hash

from ..core.exceptions import AuthenticationError, ValidationError
from .model import AdminIdentity


class AuthService:
    """Use case: authenticate the admin (login) and API callers (bearer token)."""

    def __init__(self, admin: AdminIdentity, *, api_token: str):
        self._admin = admin
        self._api_token = api_token

    def authenticate(self, username: str, password: str) -> AdminIdentity:
        if not username or not password:
            raise ValidationError("Username and password are required")

        if not hmac.compare_digest(username.encode("utf-8"), self._admin.username.encode("utf-8")):
            raise AuthenticationError("Invalid username or password")

        try:
            ok = check_password_hash(self._admin.password_hash, password)
        except (ValueError, TypeError):
            # e.g. an empty or malformed hash in production settings
            ok = False

        if not ok:
            raise AuthenticationError("Invalid username or password")
        return self._admin

    def verify_bearer(self, authorization: Optional[str]) -> None:
        scheme, _, token = (authorization or "").partition(" ")
        if scheme.lower() != "bearer" or not token.strip() or not self._api_token:
            raise AuthenticationError("Missing or invalid bearer token")
        if not hmac.compare_digest(token.strip().encode("utf-8"), self._api_token.encode("utf-8")):
            raise AuthenticationError("Missing or invalid bearer token")
