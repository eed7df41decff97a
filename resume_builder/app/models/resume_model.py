import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship

from resume_builder.app.models import Base

log = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ResumeData:
    """Constructor arguments for `Resume`."""

    user_id: int
    content: str = ""


class Resume(Base):
    """A user's saved resume: one opaque markdown document per user.

    The structured form is never stored; only the markdown snapshot the
    user last submitted.

    Attributes:
        id (int): Primary key.
        user_id (int): Owner. Unique, so a save replaces the previous document.
        content (str): The markdown, stored exactly as submitted.
        created_at (datetime): First save.
        updated_at (datetime): Latest save.
        user (User): The owner.
    """

    __tablename__ = "resumes"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    content = Column(Text, nullable=False, default="")
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)

    user = relationship("User", back_populates="resume")

    def __init__(self, data: ResumeData):
        _msg = f"Initializing Resume for user {data.user_id}"
        log.debug(_msg)
        self.user_id = data.user_id
        self.content = data.content
