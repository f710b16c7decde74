from __future__ import annotations

from datetime import date

import pytest

from peopleops.core.exceptions import AuthenticationError, ValidationError


def _sign_up(svc, **overrides):
    fields = dict(
        email="Dana@Example.com",
        password="hunter22",
        name="Dana Doe",
        position="Analyst",
        department="Finance",
        today=date(2024, 6, 3),
    )
    fields.update(overrides)
    email = fields.pop("email")
    password = fields.pop("password")
    return svc.sign_up(email, password, **fields)


def test_sign_up_creates_identity_and_profile(container, repos):
    identity = _sign_up(container.auth_service)

    assert identity.email == "dana@example.com"
    assert identity.password_hash != "hunter22"

    profile = repos.profiles.get_by_id(identity.identity_id)
    assert profile.name == "Dana Doe"
    assert profile.email == "dana@example.com"
    assert profile.hire_date == date(2024, 6, 3)


def test_sign_up_then_sign_in(container):
    svc = container.auth_service
    identity = _sign_up(svc)

    session_identity = svc.sign_in("dana@example.com", "hunter22")

    assert session_identity.identity_id == identity.identity_id
    assert session_identity.name == "Dana Doe"


def test_sign_up_rejects_existing_email(container):
    with pytest.raises(ValidationError, match="already registered"):
        _sign_up(container.auth_service, email="bob@example.com")


def test_sign_up_translates_store_duplicate(container, repos, monkeypatch):
    monkeypatch.setattr(repos.identities, "get_by_email", lambda email: None)
    _sign_up(container.auth_service)

    with pytest.raises(ValidationError, match="already registered"):
        _sign_up(container.auth_service)


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"email": "not-an-email"}, "email"),
        ({"password": "12345"}, "Password"),
        ({"name": "D"}, "Name"),
        ({"position": ""}, "Position"),
        ({"department": "x"}, "Department"),
    ],
)
def test_sign_up_validation(container, repos, overrides, message):
    with pytest.raises(ValidationError, match=message):
        _sign_up(container.auth_service, **overrides)
    assert "dana@example.com" not in repos.identities.by_email


def test_sign_in_wrong_password(container):
    with pytest.raises(AuthenticationError, match="Invalid login credentials"):
        container.auth_service.sign_in("bob@example.com", "wrong-password")


def test_sign_in_unknown_email(container):
    with pytest.raises(AuthenticationError):
        container.auth_service.sign_in("nobody@example.com", "secret123")


def test_sign_in_short_password_is_validation_error(container):
    with pytest.raises(ValidationError):
        container.auth_service.sign_in("bob@example.com", "123")


def test_sign_in_uses_profile_name(container, ids):
    s = container.auth_service.sign_in("BOB@example.com", "secret123")
    assert s.identity_id == ids.member
    assert s.name == "Bob Member"
