from unittest.mock import MagicMock

from resume_builder.app.editor.sessions import EditorSessionStore
from resume_builder.app.editor.synchronizer import ActiveView


def test_build_editor_session_shares_notifier(make_editor_session):
    session = make_editor_session(initial_content="# Saved")

    assert session.user_id == 1
    assert session.synchronizer.markdown == "# Saved"
    assert session.synchronizer.active_view is ActiveView.MARKDOWN
    assert session.synchronizer.display_name == "Ada"
    assert session.persistence._notifier is session.notifier
    assert session.export_pipeline._notifier is session.notifier


def test_store_creates_once(make_editor_session):
    store = EditorSessionStore()
    factory = MagicMock(side_effect=make_editor_session)

    first = store.get_or_create(1, factory)
    second = store.get_or_create(1, factory)

    assert first is second
    factory.assert_called_once_with()
    assert store.get(1) is first


def test_store_keeps_users_apart(make_editor_session):
    store = EditorSessionStore()

    first = store.get_or_create(1, make_editor_session)
    second = store.get_or_create(2, make_editor_session)

    assert first is not second


def test_discard_forgets_session(make_editor_session):
    store = EditorSessionStore()
    store.get_or_create(1, make_editor_session)

    store.discard(1)
    store.discard(1)

    assert store.get(1) is None


def test_store_drops_idle_sessions(make_editor_session):
    now = [0.0]
    store = EditorSessionStore(max_idle_seconds=60, clock=lambda: now[0])
    first = store.get_or_create(1, make_editor_session)

    now[0] = 59.0
    assert store.get_or_create(1, make_editor_session) is first

    now[0] = 120.0
    assert store.get(1) is None
    assert store.get_or_create(1, make_editor_session) is not first


def test_store_without_idle_limit_keeps_sessions(make_editor_session):
    now = [0.0]
    store = EditorSessionStore(clock=lambda: now[0])
    first = store.get_or_create(1, make_editor_session)

    now[0] = 10_000_000.0

    assert store.get(1) is first
