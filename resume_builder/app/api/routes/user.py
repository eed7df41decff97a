import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from resume_builder.app.api.dependencies import get_editor_session_store
from resume_builder.app.core.auth import SESSION_COOKIE, get_current_user_from_cookie
from resume_builder.app.core.config import Settings, get_settings
from resume_builder.app.core.security import authenticate_user, create_access_token
from resume_builder.app.database.database import get_db
from resume_builder.app.models.user import User
from resume_builder.app.schemas.user import Token, UserResponse

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("/login", response_model=Token)
def login_user(
    response: Response,
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> Token:
    """
    Sign a user in.

    Args:
        response: The outgoing response; receives the session cookie.
        form_data: OAuth2 password form with username and password.
        db: Database session.
        settings: Supplies the token signing parameters.

    Returns:
        Token: The bearer token, identical to the cookie value.

    Raises:
        HTTPException: 401 for bad credentials or a deactivated account.

    """
    user = authenticate_user(db, form_data.username, form_data.password)
    if user is None or not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = create_access_token(data={"sub": user.username}, settings=settings)
    response.set_cookie(
        key=SESSION_COOKIE,
        value=token,
        httponly=True,
        samesite="lax",
        path="/",
        secure=False,  # TODO: derive from settings once HTTPS deployment is configured
    )
    _msg = f"User {user.username} signed in"
    log.info(_msg)
    return Token(access_token=token, token_type="bearer")


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout_user(
    current_user: Annotated[User, Depends(get_current_user_from_cookie)],
) -> Response:
    """Drop the session cookie and the user's open editor session."""
    get_editor_session_store().discard(current_user.id)
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    response.delete_cookie(SESSION_COOKIE, path="/")
    _msg = f"User {current_user.username} signed out"
    log.info(_msg)
    return response


@router.get("/me", response_model=UserResponse)
def read_current_user(
    current_user: Annotated[User, Depends(get_current_user_from_cookie)],
) -> User:
    """Return the signed-in user's profile."""
    return current_user
