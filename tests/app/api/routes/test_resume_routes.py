from unittest.mock import patch

import pytest

from resume_builder.app.core.auth import get_current_user_from_cookie
from resume_builder.app.database.database import get_db


@pytest.fixture
def authed_client(app, client, test_user, db_session):
    """Client authenticated as `test_user` against the in-memory database."""
    db_session.add(test_user)
    db_session.commit()
    app.dependency_overrides[get_current_user_from_cookie] = lambda: test_user
    app.dependency_overrides[get_db] = lambda: db_session
    return client


def test_get_resume_without_saved_content(authed_client):
    response = authed_client.get("/api/resume")

    assert response.status_code == 200
    assert response.json() == {"content": "", "updated_at": None}


def test_save_then_get_resume(authed_client):
    response = authed_client.put("/api/resume", json={"content": "# Ada\n"})

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "error": None,
        "saved_content": "# Ada\n",
    }

    response = authed_client.get("/api/resume")
    assert response.json()["content"] == "# Ada\n"
    assert response.json()["updated_at"] is not None


def test_save_resume_replaces_content(authed_client):
    authed_client.put("/api/resume", json={"content": "one"})
    authed_client.put("/api/resume", json={"content": "two"})

    assert authed_client.get("/api/resume").json()["content"] == "two"


@patch("resume_builder.app.api.routes.resume.save_resume_content")
def test_save_resume_failure(mock_save, authed_client):
    mock_save.side_effect = RuntimeError("database unavailable")

    response = authed_client.put("/api/resume", json={"content": "x"})

    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to save resume"


def test_compose_uses_display_name(authed_client):
    response = authed_client.post("/api/resume/compose", json={"summary": "Engineer"})

    assert response.status_code == 200
    assert response.json()["markdown"] == (
        '## <div align="center">Ada Lovelace</div>\n\n'
        "## Professional Summary\n\nEngineer"
    )


def test_compose_accepts_camel_case_form(authed_client):
    payload = {
        "contactInfo": {"email": "ada@example.com"},
        "experience": [
            {
                "title": "Analyst",
                "organization": "Babbage & Co",
                "startDate": "1842",
                "current": True,
            }
        ],
    }

    response = authed_client.post("/api/resume/compose", json=payload)

    markdown = response.json()["markdown"]
    assert "📧 ada@example.com" in markdown
    assert "### Analyst @ Babbage & Co\n1842 - Present" in markdown


def test_validate_reports_field_errors(authed_client):
    payload = {
        "contactInfo": {"email": "not-an-email", "linkedin": "linkedin.com/in/ada"},
        "experience": [{"title": "Analyst", "organization": "Co", "startDate": "2020"}],
    }

    response = authed_client.post("/api/resume/validate", json=payload)

    body = response.json()
    assert response.status_code == 200
    assert body["valid"] is False
    assert set(body["errors"]) == {
        "contactInfo.email",
        "contactInfo.linkedin",
        "experience.0.endDate",
    }


def test_validate_accepts_valid_form(authed_client):
    response = authed_client.post("/api/resume/validate", json={"summary": "Engineer"})

    assert response.json() == {"valid": True, "errors": {}}


def test_resume_routes_require_authentication(app, client, db_session):
    app.dependency_overrides[get_db] = lambda: db_session

    assert client.get("/api/resume").status_code == 401
    assert client.put("/api/resume", json={"content": "x"}).status_code == 401
