import logging

from sqlalchemy.orm import Session

from resume_builder.app.core.security import get_password_hash
from resume_builder.app.models.user import User, UserData
from resume_builder.app.schemas.user import UserCreate

log = logging.getLogger(__name__)


def get_user_by_username(db: Session, username: str) -> User | None:
    """Retrieve a user by username, or None if there is no such user."""
    return db.query(User).filter(User.username == username).first()


def create_user(db: Session, user_data: UserCreate) -> User:
    """Create a new user.

    Args:
        db (Session): The database session.
        user_data (UserCreate): Username, email, password and optional display name.

    Returns:
        User: The newly created user.

    Raises:
        ValueError: If the username or email is already taken.

    Notes:
        1. Reject duplicate usernames and emails.
        2. Hash the password.
        3. Add and commit the user, then refresh it.
        4. Database access: reads and writes the User table.

    """
    _msg = f"create_user starting for {user_data.username}"
    log.debug(_msg)

    if get_user_by_username(db, user_data.username) is not None:
        raise ValueError(f"Username already registered: {user_data.username}")
    if db.query(User).filter(User.email == user_data.email).first() is not None:
        raise ValueError(f"Email already registered: {user_data.email}")

    user = User(
        data=UserData(
            username=user_data.username,
            email=user_data.email,
            hashed_password=get_password_hash(user_data.password),
            full_name=user_data.full_name,
        ),
    )
    db.add(user)
    db.commit()
    db.refresh(user)

    _msg = f"create_user returning for {user.username}"
    log.debug(_msg)
    return user
