import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from resume_builder.app.api.routes.route_logic.markdown_composer import (
    compose_resume_markdown,
)
from resume_builder.app.api.routes.route_logic.resume_crud import (
    get_resume_for_user,
    save_resume_content,
)
from resume_builder.app.api.routes.route_logic.resume_validation import (
    validate_resume_sections,
)
from resume_builder.app.api.routes.route_models import (
    ComposeResponse,
    ResumeContentResponse,
    SaveRequest,
    SaveResponse,
    ValidationResponse,
)
from resume_builder.app.core.auth import get_current_user_from_cookie
from resume_builder.app.core.identity import get_display_name
from resume_builder.app.database.database import get_db
from resume_builder.app.models.resume.sections import ResumeSections
from resume_builder.app.models.user import User

from . import resume_editor, resume_export

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/resume", tags=["resume"])

router.include_router(resume_editor.router)
router.include_router(resume_export.router)


@router.get("", response_model=ResumeContentResponse)
async def get_resume(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user_from_cookie),
):
    """
    Return the current user's saved resume markdown.

    Args:
        db (Session): The database session dependency.
        current_user (User): The authenticated user.

    Returns:
        ResumeContentResponse: The saved content, empty if nothing was saved yet.

    """
    resume = get_resume_for_user(db, user_id=current_user.id)
    if resume is None:
        return ResumeContentResponse(content="")
    return ResumeContentResponse(content=resume.content, updated_at=resume.updated_at)


@router.put("", response_model=SaveResponse)
async def save_resume(
    request: SaveRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user_from_cookie),
):
    """
    Store markdown for the current user, replacing any earlier content.

    Args:
        request (SaveRequest): The markdown to store.
        db (Session): The database session dependency.
        current_user (User): The authenticated user.

    Returns:
        SaveResponse: The stored content.

    Raises:
        HTTPException: 500 if the database write fails.

    Notes:
        1. Saving the same content twice leaves the same single row behind.

    """
    _msg = f"save_resume starting for user {current_user.id}"
    log.debug(_msg)
    try:
        resume = save_resume_content(
            db,
            user_id=current_user.id,
            content=request.content,
        )
    except Exception as e:
        _msg = f"Failed to save resume: {e}"
        log.exception(_msg)
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save resume",
        )
    return SaveResponse(success=True, saved_content=resume.content)


@router.post("/compose", response_model=ComposeResponse)
async def compose_resume(
    sections: ResumeSections,
    current_user: User = Depends(get_current_user_from_cookie),
):
    """
    Compose markdown from structured form data without touching any state.

    Args:
        sections (ResumeSections): The structured form data.
        current_user (User): The authenticated user, whose display name heads the resume.

    Returns:
        ComposeResponse: The composed markdown.

    """
    markdown = compose_resume_markdown(sections, get_display_name(current_user))
    return ComposeResponse(markdown=markdown)


@router.post("/validate", response_model=ValidationResponse)
async def validate_resume(
    sections: ResumeSections,
    current_user: User = Depends(get_current_user_from_cookie),
):
    """
    Check structured form data against the submission rules.

    Args:
        sections (ResumeSections): The structured form data.
        current_user (User): The authenticated user.

    Returns:
        ValidationResponse: Field-level errors, empty when valid.

    """
    errors = validate_resume_sections(sections)
    return ValidationResponse(valid=not errors, errors=errors)
