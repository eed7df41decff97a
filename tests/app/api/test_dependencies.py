import asyncio
from unittest.mock import MagicMock, patch

import pytest

from resume_builder.app.api.dependencies import (
    _save_in_threadpool,
    build_export_pipeline,
    build_print_renderer,
    get_editor_session,
    get_editor_session_store,
)
from resume_builder.app.core.config import Settings
from resume_builder.app.editor.notifications import Notifier
from resume_builder.app.editor.synchronizer import ActiveView


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture(autouse=True)
def fresh_store():
    get_editor_session_store.cache_clear()
    yield
    get_editor_session_store.cache_clear()


def test_build_print_renderer_uses_settings(settings):
    settings.export_print_delay_ms = 250

    renderer = build_print_renderer(settings)

    assert renderer.print_delay_ms == 250
    assert renderer.fallback_ms == settings.export_fallback_ms
    assert renderer.auto_print is True


def test_build_export_pipeline_has_no_server_side_delays(settings):
    pipeline = build_export_pipeline(settings, Notifier())

    assert pipeline.print_delay == 0
    assert pipeline.close_delay == 0
    assert pipeline.fallback_delay == settings.export_fallback_ms / 1000


@pytest.mark.asyncio
@patch("resume_builder.app.api.dependencies.get_resume_content")
async def test_get_editor_session_opens_with_saved_content(mock_content, test_user, settings):
    mock_content.return_value = "# Saved"
    db = MagicMock()

    session = await get_editor_session(current_user=test_user, db=db, settings=settings)

    mock_content.assert_called_once_with(db, user_id=1)
    assert session.user_id == 1
    assert session.synchronizer.markdown == "# Saved"
    assert session.synchronizer.active_view is ActiveView.MARKDOWN
    assert session.synchronizer.display_name == "Ada Lovelace"


@pytest.mark.asyncio
@patch("resume_builder.app.api.dependencies.get_resume_content")
async def test_get_editor_session_reuses_session(mock_content, test_user, settings):
    mock_content.return_value = ""

    first = await get_editor_session(current_user=test_user, db=MagicMock(), settings=settings)
    test_user.full_name = "Augusta Ada King"
    second = await get_editor_session(current_user=test_user, db=MagicMock(), settings=settings)

    assert first is second
    mock_content.assert_called_once()
    assert second.synchronizer.display_name == "Augusta Ada King"


@pytest.mark.asyncio
@patch("resume_builder.app.api.dependencies.get_resume_content")
async def test_get_editor_session_applies_overwrite_policy(mock_content, test_user, settings):
    mock_content.return_value = ""
    settings.editor_overwrite_manual_edits = False

    session = await get_editor_session(current_user=test_user, db=MagicMock(), settings=settings)

    assert session.synchronizer.overwrite_manual_edits is False


@pytest.mark.asyncio
@patch("resume_builder.app.api.dependencies.get_resume_content")
async def test_concurrent_first_requests_share_one_session(mock_content, test_user, settings):
    mock_content.return_value = "# Saved"

    first, second = await asyncio.gather(
        get_editor_session(current_user=test_user, db=MagicMock(), settings=settings),
        get_editor_session(current_user=test_user, db=MagicMock(), settings=settings),
    )

    assert first is second
    mock_content.assert_called_once()


def test_session_store_expires_with_access_tokens():
    with patch("resume_builder.app.api.dependencies.get_settings") as mock_settings:
        mock_settings.return_value.access_token_expire_minutes = 30

        store = get_editor_session_store()

    assert store._max_idle_seconds == 1800


@pytest.mark.asyncio
@patch("resume_builder.app.api.dependencies.persist_resume_content")
async def test_save_in_threadpool(mock_persist):
    mock_persist.return_value = "# Saved"

    result = await _save_in_threadpool("# Saved", user_id=4)

    assert result == "# Saved"
    mock_persist.assert_called_once_with(4, "# Saved")
