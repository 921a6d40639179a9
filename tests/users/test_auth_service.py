from __future__ import annotations

import pytest
from werkzeug.security import generate_password_hash

from src.intern_portal.intern_portal.core.exceptions import AuthenticationError, ValidationError
from src.intern_portal.intern_portal.users.model import AdminIdentity
from src.intern_portal.intern_portal.users.service import AuthService


@pytest.fixture
def auth():
    return AuthService(AdminIdentity("admin", generate_password_hash("right")), api_token="tok")


def test_authenticate_ok(auth):
    assert auth.authenticate("admin", "right").username == "admin"


@pytest.mark.parametrize("username, password", [("admin", "wrong"), ("root", "right"), ("ädmin", "right")])
def test_authenticate_wrong_credentials(auth, username, password):
    with pytest.raises(AuthenticationError):
        auth.authenticate(username, password)


def test_authenticate_requires_both_fields(auth):
    with pytest.raises(ValidationError):
        auth.authenticate("admin", "")


def test_unset_password_hash_never_authenticates():
    auth = AuthService(AdminIdentity("admin", ""), api_token="tok")
    with pytest.raises(AuthenticationError):
        auth.authenticate("admin", "anything")


def test_verify_bearer(auth):
    auth.verify_bearer("Bearer tok")
    auth.verify_bearer("bearer tok")

    for header in (None, "", "tok", "Basic tok", "Bearer", "Bearer nope"):
        with pytest.raises(AuthenticationError):
            auth.verify_bearer(header)
