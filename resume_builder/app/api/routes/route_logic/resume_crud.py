import logging

from sqlalchemy.orm import Session

from resume_builder.app.database.database import session_scope
from resume_builder.app.models.resume_model import Resume as DatabaseResume
from resume_builder.app.models.resume_model import ResumeData

log = logging.getLogger(__name__)


def get_resume_for_user(db: Session, user_id: int) -> DatabaseResume | None:
    """Retrieve the resume belonging to a user.

    Args:
        db (Session): The SQLAlchemy database session.
        user_id (int): The unique identifier of the owner.

    Returns:
        DatabaseResume | None: The user's resume, or None if nothing was saved yet.

    Notes:
        1. This function performs a single database query.

    """
    return db.query(DatabaseResume).filter(DatabaseResume.user_id == user_id).first()


def get_resume_content(db: Session, user_id: int) -> str:
    """Return the user's saved markdown, or an empty string if there is none."""
    resume = get_resume_for_user(db, user_id=user_id)
    if resume is None:
        return ""
    return resume.content or ""


def save_resume_content(db: Session, user_id: int, content: str) -> DatabaseResume:
    """Create or overwrite the user's resume content.

    Repeated saves of the same content leave the same row behind.

    Args:
        db (Session): The database session.
        user_id (int): The unique identifier of the owner.
        content (str): The markdown document to store, as-is.

    Returns:
        DatabaseResume: The saved resume.

    Notes:
        1. Look up the existing resume for the user.
        2. If none exists, create one; otherwise replace its content.
        3. Commit the transaction and refresh the instance.
        4. This function performs a database write operation.

    """
    _msg = f"save_resume_content starting for user {user_id}"
    log.debug(_msg)

    resume = get_resume_for_user(db, user_id=user_id)
    if resume is None:
        resume = DatabaseResume(data=ResumeData(user_id=user_id, content=content))
        db.add(resume)
    else:
        resume.content = content
    db.commit()
    db.refresh(resume)

    _msg = f"save_resume_content returning for user {user_id}"
    log.debug(_msg)
    return resume


def persist_resume_content(user_id: int, content: str) -> str:
    """Save resume content using a session of its own.

    Used by the editor, whose saves outlive the request that started the
    editor session.

    Args:
        user_id (int): The unique identifier of the owner.
        content (str): The markdown document to store.

    Returns:
        str: The content as stored.

    """
    with session_scope() as db:
        resume = save_resume_content(db, user_id=user_id, content=content)
        return resume.content
