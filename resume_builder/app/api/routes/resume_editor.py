import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import HTMLResponse

from resume_builder.app.api.dependencies import get_editor_session
from resume_builder.app.api.routes.route_logic.resume_validation import (
    validate_resume_sections,
)
from resume_builder.app.api.routes.route_models import (
    EditorStateResponse,
    MarkdownEditRequest,
    PreviewModeRequest,
    SaveResponse,
    SubmitResponse,
    ViewChangeRequest,
)
from resume_builder.app.editor.persistence import SaveInProgressError
from resume_builder.app.editor.sessions import EditorSession
from resume_builder.app.export.pipeline import ExportInProgressError
from resume_builder.app.models.resume.sections import ResumeSections

log = logging.getLogger(__name__)

router = APIRouter(prefix="/editor")


def _state(session: EditorSession) -> EditorStateResponse:
    """Snapshot the session and hand over its pending notifications."""
    return EditorStateResponse.from_state(
        session.synchronizer,
        session.notifier.drain(),
        is_saving=session.persistence.is_saving,
        is_generating=session.export_pipeline.is_generating,
    )


@router.get("", response_model=EditorStateResponse)
async def get_editor_state(session: EditorSession = Depends(get_editor_session)):
    """
    Return the editor state, opening the session on first use.

    Args:
        session (EditorSession): The current user's editor session.

    Returns:
        EditorStateResponse: The state. A fresh session with saved content
            starts on the markdown tab showing that content.

    """
    return _state(session)


@router.put("/sections", response_model=EditorStateResponse)
async def update_sections(
    sections: ResumeSections,
    session: EditorSession = Depends(get_editor_session),
):
    """
    Apply a structured form change.

    Args:
        sections (ResumeSections): The complete, possibly incomplete, form data.
        session (EditorSession): The current user's editor session.

    Returns:
        EditorStateResponse: The state; the markdown is regenerated while the form tab is active.

    """
    session.synchronizer.update_sections(sections)
    return _state(session)


@router.put("/markdown", response_model=EditorStateResponse)
async def edit_markdown(
    request: MarkdownEditRequest,
    session: EditorSession = Depends(get_editor_session),
):
    """Replace the document with a direct edit; the document becomes MANUAL."""
    session.synchronizer.edit_markdown(request.markdown)
    return _state(session)


@router.post("/resync", response_model=EditorStateResponse)
async def resync_markdown(session: EditorSession = Depends(get_editor_session)):
    """Rebuild the document from the form, discarding manual edits."""
    session.synchronizer.resync()
    return _state(session)


@router.put("/view", response_model=EditorStateResponse)
async def switch_view(
    request: ViewChangeRequest,
    session: EditorSession = Depends(get_editor_session),
):
    """Switch between the form tab and the markdown tab."""
    session.synchronizer.switch_view(request.view)
    return _state(session)


@router.put("/preview-mode", response_model=EditorStateResponse)
async def set_preview_mode(
    request: PreviewModeRequest,
    session: EditorSession = Depends(get_editor_session),
):
    """Switch between the rendered preview and the raw markdown editor."""
    session.synchronizer.set_preview_mode(request.mode)
    return _state(session)


@router.post("/submit", response_model=SubmitResponse)
async def submit_resume(session: EditorSession = Depends(get_editor_session)):
    """
    Validate the form and save the document currently shown in the preview.

    Args:
        session (EditorSession): The current user's editor session.

    Returns:
        SubmitResponse: The save result and the editor state with its notification.

    Raises:
        HTTPException: 422 with field errors if the form is invalid;
            409 if a save is already in flight.

    Notes:
        1. Validate the stored form data; invalid data blocks the submission.
        2. Take the preview snapshot as-is, without regenerating it.
        3. Hand the snapshot to the persistence bridge.
        4. A failed save is reported in the result and notification, not as an HTTP error.

    """
    errors = validate_resume_sections(session.synchronizer.sections)
    if errors:
        _msg = f"Submission blocked by {len(errors)} validation errors"
        log.info(_msg)
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"errors": errors},
        )

    try:
        result = await session.persistence.submit(session.synchronizer.snapshot())
    except SaveInProgressError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    return SubmitResponse(
        result=SaveResponse(
            success=result.success,
            error=result.error,
            saved_content=result.saved_content,
        ),
        state=_state(session),
    )


@router.post("/export", response_class=HTMLResponse)
async def export_resume(session: EditorSession = Depends(get_editor_session)):
    """
    Export the document currently shown in the preview as a printable page.

    Args:
        session (EditorSession): The current user's editor session.

    Returns:
        HTMLResponse: The printable page.

    Raises:
        HTTPException: 409 if an export is already running; 422 with the
            user-facing message if the export fails.

    """
    try:
        result = await session.export_pipeline.generate(session.synchronizer.snapshot())
    except ExportInProgressError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    if not result.success:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "message": result.error,
                "state": _state(session).model_dump(mode="json", by_alias=True),
            },
        )
    return HTMLResponse(content=result.document.html)
