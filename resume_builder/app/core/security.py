import logging
from datetime import UTC, datetime, timedelta

import bcrypt
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from resume_builder.app.core.config import Settings
from resume_builder.app.models.user import User

log = logging.getLogger(__name__)

# The session cookie is checked first, so a missing header is not an error here.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/users/login", auto_error=False)


def create_access_token(
    data: dict,
    settings: Settings,
    expires_delta: timedelta | None = None,
) -> str:
    """Sign a JWT carrying `data` and an expiry claim.

    Args:
        data (dict): Claims to sign; the username goes in "sub".
        settings (Settings): Supplies the secret key, algorithm and default lifetime.
        expires_delta (timedelta | None): Token lifetime. Defaults to
            `access_token_expire_minutes`.

    Returns:
        str: The encoded token.

    """
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    claims = {**data, "exp": datetime.now(UTC) + lifetime}
    _msg = f"Issuing access token for {claims.get('sub')}"
    log.debug(_msg)
    return jwt.encode(claims, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str, settings: Settings) -> str | None:
    """Return the subject of a valid token.

    Args:
        token (str): The encoded JWT.
        settings (Settings): Supplies the secret key and algorithm.

    Returns:
        str | None: The "sub" claim, or None for a malformed, forged or expired token.

    """
    try:
        claims = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as e:
        _msg = f"Rejected access token: {e}"
        log.debug(_msg)
        return None
    return claims.get("sub")


def get_password_hash(password: str) -> str:
    """Hash a password with a fresh bcrypt salt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a password against its bcrypt hash."""
    return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))


def authenticate_user(db: Session, username: str, password: str) -> User | None:
    """Look up a user and check the password.

    Args:
        db (Session): Database session.
        username (str): The login name.
        password (str): The plain text password.

    Returns:
        User | None: The user when the password matches, otherwise None.

    Notes:
        1. Unknown usernames and wrong passwords are indistinguishable to the caller.
        2. Database access: one query on the users table.

    """
    user = db.query(User).filter(User.username == username).first()
    if user is None or not verify_password(password, user.hashed_password):
        _msg = f"Authentication failed for {username}"
        log.debug(_msg)
        return None
    return user
