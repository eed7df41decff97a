import logging
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from resume_builder.app.api.routes.route_logic.user_crud import get_user_by_username
from resume_builder.app.core.config import get_settings
from resume_builder.app.core.security import decode_access_token, oauth2_scheme
from resume_builder.app.database.database import get_db
from resume_builder.app.models.user import User

log = logging.getLogger(__name__)

SESSION_COOKIE = "access_token"


def _username_from_token(token: str | None) -> str | None:
    """Return the token subject, or None if the token is missing or unusable."""
    if not token:
        return None
    return decode_access_token(token, get_settings())


def get_current_user_from_cookie(
    request: Request,
    bearer_token: Annotated[str | None, Depends(oauth2_scheme)],
    db: Session = Depends(get_db),
) -> User:
    """Resolve the signed-in user for a request.

    Args:
        request: The incoming request; its `access_token` cookie is checked first.
        bearer_token: Token from an `Authorization: Bearer` header, used when there is no cookie.
        db: Database session.

    Returns:
        User: The active user named by the token.

    Raises:
        HTTPException: 401 for a missing or invalid token, an unknown user
            or a deactivated account. The cases are not distinguished.

    """
    token = request.cookies.get(SESSION_COOKIE) or bearer_token
    username = _username_from_token(token)
    user = get_user_by_username(db, username) if username else None
    if user is None or not user.is_active:
        _msg = "Rejecting request without a valid session"
        log.debug(_msg)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user
