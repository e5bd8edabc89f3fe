import asyncio

import pytest
from sqlalchemy import func, select

from eventhub.errors import AuthError, ConflictError, NotFoundError, PolicyError, ValidationError
from eventhub.models.user import User
from eventhub.auth_token import Identity, SessionVerifier
from eventhub.schemas import LoginRequest, SignupRequest
from eventhub.services import AuthService


def _signup_request(**overrides):
    fields = {
        "name": "Ann",
        "email": "a@x.com",
        "password": "Abcdef1!",
        "confirmPassword": "Abcdef1!",
    }
    fields.update(overrides)
    return SignupRequest(**fields)


def _user_count(db) -> int:
    async def _count():
        return (await db.execute(select(func.count(User.id)))).scalar_one()

    return asyncio.run(_count())


def test_signup_persists_hashed_password(db, settings):
    response = asyncio.run(AuthService(settings).signup(db, _signup_request()))

    assert response.success is True
    assert response.message == "User created successfully"

    async def _load():
        return (await db.execute(select(User).where(User.email == "a@x.com"))).scalar_one()

    user = asyncio.run(_load())
    assert user.name == "Ann"
    assert user.password_hash != "Abcdef1!"
    assert user.password_hash.startswith("$argon2")


@pytest.mark.parametrize("missing", ["name", "email", "password", "confirmPassword"])
def test_signup_requires_every_field(db, settings, missing):
    with pytest.raises(ValidationError) as excinfo:
        asyncio.run(AuthService(settings).signup(db, _signup_request(**{missing: None})))
    assert excinfo.value.message == "All fields are required"
    assert _user_count(db) == 0


def test_signup_rejects_mismatched_confirmation(db, settings):
    with pytest.raises(ValidationError) as excinfo:
        asyncio.run(AuthService(settings).signup(db, _signup_request(confirmPassword="Abcdef1?")))
    assert excinfo.value.message == "Passwords do not match"
    assert _user_count(db) == 0


def test_signup_rejects_weak_password(db, settings):
    with pytest.raises(PolicyError):
        asyncio.run(
            AuthService(settings).signup(
                db, _signup_request(password="password", confirmPassword="password")
            )
        )
    assert _user_count(db) == 0


def test_signup_twice_with_same_email_conflicts(db, settings):
    service = AuthService(settings)
    asyncio.run(service.signup(db, _signup_request()))

    with pytest.raises(ConflictError) as excinfo:
        asyncio.run(service.signup(db, _signup_request(name="Other", email="A@X.com")))

    assert excinfo.value.status_code == 400
    assert excinfo.value.message == "Email already registered"
    assert _user_count(db) == 1


def test_login_issues_token_accepted_by_verifier(db, settings):
    service = AuthService(settings)
    asyncio.run(service.signup(db, _signup_request()))

    response = asyncio.run(service.login(db, LoginRequest(email="a@x.com", password="Abcdef1!")))

    identity = SessionVerifier(settings).authenticate(response.token)
    assert isinstance(identity, Identity)
    assert identity.name == "Ann"
    assert identity.user_id == 1


def test_login_unknown_email(db, settings):
    with pytest.raises(NotFoundError) as excinfo:
        asyncio.run(
            AuthService(settings).login(db, LoginRequest(email="nobody@x.com", password="Abcdef1!"))
        )
    assert excinfo.value.status_code == 400
    assert excinfo.value.message == "User not found"


def test_login_wrong_password(db, settings):
    service = AuthService(settings)
    asyncio.run(service.signup(db, _signup_request()))

    with pytest.raises(AuthError) as excinfo:
        asyncio.run(service.login(db, LoginRequest(email="a@x.com", password="Wrong1!pw")))
    assert excinfo.value.status_code == 400
    assert excinfo.value.message == "Incorrect password"


def test_login_requires_credentials(db, settings):
    with pytest.raises(ValidationError):
        asyncio.run(AuthService(settings).login(db, LoginRequest(email="a@x.com")))
