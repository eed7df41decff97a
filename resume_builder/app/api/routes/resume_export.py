import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from resume_builder.app.api.dependencies import build_export_pipeline
from resume_builder.app.api.routes.route_logic.resume_crud import get_resume_for_user
from resume_builder.app.core.auth import get_current_user_from_cookie
from resume_builder.app.core.config import Settings, get_settings
from resume_builder.app.database.database import get_db
from resume_builder.app.editor.notifications import Notifier
from resume_builder.app.export.pipeline import CONTENT_NOT_FOUND_MESSAGE
from resume_builder.app.models.user import User

log = logging.getLogger(__name__)

router = APIRouter(prefix="/export")


def _saved_content(db: Session, user: User) -> str:
    """Return the user's saved markdown or raise 404."""
    resume = get_resume_for_user(db, user_id=user.id)
    if resume is None or not (resume.content or "").strip():
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=CONTENT_NOT_FOUND_MESSAGE,
        )
    return resume.content


@router.get("/markdown")
async def export_resume_markdown(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user_from_cookie),
) -> Response:
    """Download the saved resume as a Markdown file.

    Args:
        db (Session): The database session dependency.
        current_user (User): The authenticated user.

    Returns:
        Response: The saved markdown as an attachment.

    Raises:
        HTTPException: 404 if nothing was saved yet.

    """
    content = _saved_content(db, current_user)
    headers = {
        "Content-Disposition": 'attachment; filename="resume.md"',
    }
    return Response(content=content, media_type="text/markdown", headers=headers)


@router.get("/print", response_class=HTMLResponse)
async def export_resume_print(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user_from_cookie),
    settings: Settings = Depends(get_settings),
) -> HTMLResponse:
    """Render the saved resume as a page that prints itself.

    Args:
        db (Session): The database session dependency.
        current_user (User): The authenticated user.
        settings (Settings): The application settings.

    Returns:
        HTMLResponse: The printable page.

    Raises:
        HTTPException: 404 if nothing was saved yet; 422 if rendering fails.

    """
    content = _saved_content(db, current_user)
    pipeline = build_export_pipeline(settings, Notifier())
    result = await pipeline.generate(content)
    if not result.success:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=result.error,
        )
    return HTMLResponse(content=result.document.html)
