import logging
from functools import lru_cache, partial

from fastapi import Depends
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from resume_builder.app.api.routes.route_logic.resume_crud import (
    get_resume_content,
    persist_resume_content,
)
from resume_builder.app.core.auth import get_current_user_from_cookie
from resume_builder.app.core.config import Settings, get_settings
from resume_builder.app.core.identity import get_display_name
from resume_builder.app.database.database import get_db
from resume_builder.app.editor.notifications import Notifier
from resume_builder.app.editor.sessions import (
    EditorSession,
    EditorSessionStore,
    build_editor_session,
)
from resume_builder.app.export.pipeline import ExportPipeline
from resume_builder.app.export.renderer import HtmlPrintRenderer
from resume_builder.app.export.surfaces import CapturedSurface
from resume_builder.app.models.user import User

log = logging.getLogger(__name__)


@lru_cache
def get_editor_session_store() -> EditorSessionStore:
    """Return the process-wide editor session store.

    Sessions idle for longer than an access token lives are dropped.
    """
    settings = get_settings()
    return EditorSessionStore(max_idle_seconds=settings.access_token_expire_minutes * 60)


def build_print_renderer(settings: Settings) -> HtmlPrintRenderer:
    """Build the print renderer configured from settings."""
    return HtmlPrintRenderer(
        print_delay_ms=settings.export_print_delay_ms,
        fallback_ms=settings.export_fallback_ms,
        close_delay_ms=settings.export_close_delay_ms,
    )


def build_export_pipeline(settings: Settings, notifier: Notifier) -> ExportPipeline:
    """
    Build an export pipeline that delivers the page to the HTTP client.

    Args:
        settings (Settings): The application settings.
        notifier (Notifier): Receives the outcome notification.

    Returns:
        ExportPipeline: A pipeline printing onto `CapturedSurface` instances.

    Notes:
        1. The captured surface loads synchronously, so server-side delays are zero;
           the page-side timers in the printed page come from settings.

    """
    return ExportPipeline(
        renderer=build_print_renderer(settings),
        surface_factory=CapturedSurface,
        notifier=notifier,
        print_delay=0,
        fallback_delay=settings.export_fallback_ms / 1000,
        close_delay=0,
    )


async def _save_in_threadpool(content: str, user_id: int) -> str:
    return await run_in_threadpool(persist_resume_content, user_id, content)


async def get_editor_session(
    current_user: User = Depends(get_current_user_from_cookie),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> EditorSession:
    """
    Dependency returning the current user's editor session.

    Args:
        current_user (User): The authenticated user.
        db (Session): The database session, used only when the session is first opened.
        settings (Settings): The application settings.

    Returns:
        EditorSession: The user's session.

    Notes:
        1. Reuse an open session from the store.
        2. Otherwise load the saved markdown and open a new session with it.
        3. The display name is refreshed on every request.
        4. Runs on the event loop, so the lookup and the creation cannot
           interleave with another request for the same user.

    """
    store = get_editor_session_store()

    def factory() -> EditorSession:
        return build_editor_session(
            user_id=current_user.id,
            initial_content=get_resume_content(db, user_id=current_user.id),
            display_name=get_display_name(current_user),
            save=partial(_save_in_threadpool, user_id=current_user.id),
            export_pipeline_factory=partial(build_export_pipeline, settings),
            overwrite_manual_edits=settings.editor_overwrite_manual_edits,
        )

    session = store.get_or_create(current_user.id, factory)
    session.synchronizer.display_name = get_display_name(current_user)
    return session
