import logging

from pydantic import BaseModel, ConfigDict, EmailStr

log = logging.getLogger(__name__)


class UserCreate(BaseModel):
    """User creation schema with password.

    Attributes:
        username (str): Unique username chosen by the user for login.
        email (EmailStr): Unique email address associated with the user.
        password (str): Plain text password, hashed before storage.
        full_name (str | None): Display name used as the resume heading.

    """

    username: str
    email: EmailStr
    password: str
    full_name: str | None = None


class UserResponse(BaseModel):
    """User response schema for returning user data.

    Attributes:
        id (int): Unique identifier assigned to the user.
        username (str): Unique username.
        email (EmailStr): Email address.
        full_name (str | None): Display name, if set.
        is_active (bool): Whether the account is active.

    """

    id: int
    username: str
    email: EmailStr
    full_name: str | None = None
    is_active: bool

    model_config = ConfigDict(from_attributes=True)


class Token(BaseModel):
    """Token schema for authentication responses."""

    access_token: str
    token_type: str
