import pytest

from resume_builder.app.api.routes.route_logic.resume_crud import save_resume_content
from resume_builder.app.core.auth import get_current_user_from_cookie
from resume_builder.app.database.database import get_db
from resume_builder.app.export.pipeline import CONTENT_NOT_FOUND_MESSAGE


@pytest.fixture
def authed_client(app, client, test_user, db_session):
    db_session.add(test_user)
    db_session.commit()
    app.dependency_overrides[get_current_user_from_cookie] = lambda: test_user
    app.dependency_overrides[get_db] = lambda: db_session
    return client


def test_export_markdown_download(authed_client, db_session, test_user):
    save_resume_content(db_session, user_id=test_user.id, content="# Ada\n")

    response = authed_client.get("/api/resume/export/markdown")

    assert response.status_code == 200
    assert response.text == "# Ada\n"
    assert response.headers["content-type"].startswith("text/markdown")
    assert response.headers["content-disposition"] == 'attachment; filename="resume.md"'


def test_export_markdown_without_content(authed_client):
    response = authed_client.get("/api/resume/export/markdown")

    assert response.status_code == 404
    assert response.json()["detail"] == CONTENT_NOT_FOUND_MESSAGE


def test_export_print_page(authed_client, db_session, test_user):
    save_resume_content(db_session, user_id=test_user.id, content="## Skills\n\n- Python")

    response = authed_client.get("/api/resume/export/print")

    assert response.status_code == 200
    assert "<h2>Skills</h2>" in response.text
    assert "<li>Python</li>" in response.text
    assert "setTimeout(printOnce, 1000)" in response.text


def test_export_print_without_content(authed_client, db_session, test_user):
    save_resume_content(db_session, user_id=test_user.id, content="   ")

    response = authed_client.get("/api/resume/export/print")

    assert response.status_code == 404
