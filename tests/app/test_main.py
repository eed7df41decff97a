def test_health_check(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_routes_registered(app):
    paths = set(app.openapi()["paths"])

    assert {
        "/api/users/login",
        "/api/users/logout",
        "/api/users/me",
        "/api/resume",
        "/api/resume/compose",
        "/api/resume/validate",
        "/api/resume/editor",
        "/api/resume/editor/sections",
        "/api/resume/editor/markdown",
        "/api/resume/editor/resync",
        "/api/resume/editor/view",
        "/api/resume/editor/preview-mode",
        "/api/resume/editor/submit",
        "/api/resume/editor/export",
        "/api/resume/export/markdown",
        "/api/resume/export/print",
    } <= paths
