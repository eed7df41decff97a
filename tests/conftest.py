from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from resume_builder.app.api.dependencies import get_editor_session_store
from resume_builder.app.core.config import get_settings
from resume_builder.app.editor.notifications import Notifier
from resume_builder.app.editor.sessions import EditorSession, build_editor_session
from resume_builder.app.export.pipeline import ExportPipeline
from resume_builder.app.export.renderer import HtmlPrintRenderer
from resume_builder.app.export.surfaces import CapturedSurface
from resume_builder.app.main import create_app
from resume_builder.app.models import Base
from resume_builder.app.models.user import User, UserData


@pytest.fixture
def app() -> FastAPI:
    """Fixture to create a new app for each test."""
    get_settings.cache_clear()
    get_editor_session_store.cache_clear()
    _app = create_app()
    yield _app
    _app.dependency_overrides.clear()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Fixture to create a test client for each test."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def test_user() -> User:
    """Fixture for an authenticated user with a display name."""
    return User(
        data=UserData(
            username="ada",
            email="ada@example.com",
            hashed_password="hashed",
            full_name="Ada Lovelace",
            id_=1,
        )
    )


@pytest.fixture
def db_session():
    """Create an in-memory SQLite database session for tests."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = SessionLocal()
    yield db
    db.close()
    Base.metadata.drop_all(bind=engine)


def make_pipeline(notifier: Notifier) -> ExportPipeline:
    """Export pipeline with no delays, printing onto captured surfaces."""
    return ExportPipeline(
        renderer=HtmlPrintRenderer(),
        surface_factory=CapturedSurface,
        notifier=notifier,
        print_delay=0,
        fallback_delay=0.5,
        close_delay=0,
    )


@pytest.fixture
def save_mock() -> AsyncMock:
    """Save collaborator echoing the content it was given."""
    return AsyncMock(side_effect=lambda content: content)


@pytest.fixture
def make_editor_session(save_mock):
    """Factory for editor sessions backed by `save_mock`."""

    def _make(initial_content: str = "", display_name: str | None = "Ada") -> EditorSession:
        return build_editor_session(
            user_id=1,
            initial_content=initial_content,
            display_name=display_name,
            save=save_mock,
            export_pipeline_factory=make_pipeline,
        )

    return _make
