import logging
from dataclasses import dataclass

from sqlalchemy import Boolean, Column, Integer, String
from sqlalchemy.orm import relationship, validates

from resume_builder.app.models import Base

log = logging.getLogger(__name__)


@dataclass
class UserData:
    """Constructor arguments for `User`.

    Attributes:
        username (str): Login name.
        email (str): Contact address, unique per user.
        hashed_password (str): bcrypt hash.
        full_name (str | None): Name shown as the resume heading.
        is_active (bool): Deactivated users cannot sign in.
        id_ (int | None): Explicit primary key, for fixtures.
    """

    username: str
    email: str
    hashed_password: str
    full_name: str | None = None
    is_active: bool = True
    id_: int | None = None


class User(Base):
    """
    An account that owns one resume.

    Attributes:
        id (int): Primary key.
        username (str): Unique login name.
        email (str): Unique e-mail address.
        hashed_password (str): bcrypt hash of the password.
        full_name (str | None): Display name; blank names are stored as None.
        is_active (bool): Whether the account may sign in.
        resume (Resume | None): The saved resume, if any.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    full_name = Column(String, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    resume = relationship(
        "Resume",
        back_populates="user",
        cascade="all, delete-orphan",
        uselist=False,
    )

    def __init__(self, data: UserData):
        _msg = f"Initializing User {data.username}"
        log.debug(_msg)
        if data.id_ is not None:
            self.id = data.id_
        self.username = data.username
        self.email = data.email
        self.hashed_password = data.hashed_password
        self.full_name = data.full_name
        self.is_active = data.is_active

    @validates("username", "email", "hashed_password")
    def validate_required_string(self, key, value):
        """Strip a required text column, rejecting non-strings and blanks."""
        if not isinstance(value, str):
            raise ValueError(f"{key} must be a string")
        stripped = value.strip()
        if not stripped:
            raise ValueError(f"{key} cannot be empty")
        return stripped

    @validates("full_name")
    def validate_full_name(self, key, full_name):
        """Store blank display names as None."""
        if full_name is not None and not isinstance(full_name, str):
            raise ValueError("full_name must be a string")
        return (full_name or "").strip() or None

    @validates("is_active")
    def validate_is_active(self, key, is_active):
        if not isinstance(is_active, bool):
            raise ValueError("is_active must be a boolean")
        return is_active
