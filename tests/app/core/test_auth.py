from datetime import timedelta
from unittest.mock import MagicMock

import pytest
from fastapi import HTTPException

from resume_builder.app.core.auth import _username_from_token, get_current_user_from_cookie
from resume_builder.app.core.config import get_settings
from resume_builder.app.core.security import (
    authenticate_user,
    create_access_token,
    get_password_hash,
    verify_password,
)
from resume_builder.app.models.user import User, UserData


@pytest.fixture
def stored_user(db_session) -> User:
    user = User(
        data=UserData(
            username="ada",
            email="ada@example.com",
            hashed_password=get_password_hash("secret"),
        )
    )
    db_session.add(user)
    db_session.commit()
    return user


def _request(token: str | None = None) -> MagicMock:
    request = MagicMock()
    request.cookies = {"access_token": token} if token else {}
    return request


def _token(username: str = "ada", **kwargs) -> str:
    return create_access_token({"sub": username}, settings=get_settings(), **kwargs)


def test_password_hash_round_trip():
    hashed = get_password_hash("secret")

    assert hashed != "secret"
    assert verify_password("secret", hashed)
    assert not verify_password("wrong", hashed)


def test_username_from_token():
    assert _username_from_token(_token()) == "ada"
    assert _username_from_token(None) is None
    assert _username_from_token("not-a-jwt") is None


def test_username_from_expired_token():
    token = _token(expires_delta=timedelta(minutes=-5))

    assert _username_from_token(token) is None


def test_authenticate_user(db_session, stored_user):
    assert authenticate_user(db_session, "ada", "secret") is stored_user
    assert authenticate_user(db_session, "ada", "wrong") is None
    assert authenticate_user(db_session, "nobody", "secret") is None


def test_current_user_from_cookie(db_session, stored_user):
    user = get_current_user_from_cookie(_request(_token()), None, db_session)

    assert user is stored_user


def test_current_user_from_bearer_token(db_session, stored_user):
    user = get_current_user_from_cookie(_request(), _token(), db_session)

    assert user is stored_user


def test_current_user_unknown_username(db_session, stored_user):
    with pytest.raises(HTTPException) as exc_info:
        get_current_user_from_cookie(_request(_token("ghost")), None, db_session)

    assert exc_info.value.status_code == 401


def test_current_user_inactive(db_session, stored_user):
    stored_user.is_active = False
    db_session.commit()

    with pytest.raises(HTTPException) as exc_info:
        get_current_user_from_cookie(_request(_token()), None, db_session)

    assert exc_info.value.detail == "Could not validate credentials"
