"""Tests for the HTTP API."""

from sqlalchemy.exc import OperationalError

from spill_registry.core.report_store import ReportStore


def test_health(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_reports_require_auth(client):
    """Test report endpoints reject anonymous calls."""
    assert client.get("/api/reports/").status_code == 401


def test_login_rejects_bad_password(client, auth_headers):
    """Test login with a wrong password."""
    response = client.post("/api/token", data={"username": "agent@example.com", "password": "nope"})
    assert response.status_code == 401


def test_me(client, auth_headers):
    """Test current user endpoint."""
    response = client.get("/api/me", headers=auth_headers)
    assert response.json()["email"] == "agent@example.com"
    assert response.json()["role"] == "user"


def test_report_lifecycle(client, auth_headers):
    """Test create, get, update and list through the API."""
    response = client.post(
        "/api/reports/",
        json={"location": "Garage municipal", "contaminant": "Diesel", "date": "2024-03-01", "status": "Complété"},
        headers=auth_headers,
    )
    assert response.status_code == 201
    created = response.json()
    assert created["status"] == "Nouvelle demande"
    assert created["env_sequential_number"].endswith("-001")

    second = client.post("/api/reports/", json={"location": "Parc"}, headers=auth_headers).json()
    assert second["env_sequential_number"].endswith("-002")

    response = client.patch(f"/api/reports/{created['id']}", json={"status": "Complété"}, headers=auth_headers)
    assert response.status_code == 200
    updated = response.json()
    assert updated["status"] == "Complété"
    assert updated["location"] == "Garage municipal"
    assert updated["env_sequential_number"] == created["env_sequential_number"]
    assert updated["created_at"] == created["created_at"]
    assert updated["updated_at"] > created["created_at"]

    fetched = client.get(f"/api/reports/{created['id']}", headers=auth_headers).json()
    assert fetched["status"] == "Complété"

    listed = client.get("/api/reports/", headers=auth_headers).json()
    assert [r["id"] for r in listed] == [second["id"], created["id"]]

    searched = client.get("/api/reports/", params={"q": "garage"}, headers=auth_headers).json()
    assert [r["id"] for r in searched] == [created["id"]]


def test_update_rejects_sequential_number(client, auth_headers):
    """Test the sequential number cannot be overwritten."""
    created = client.post("/api/reports/", json={"location": "Parc"}, headers=auth_headers).json()
    response = client.patch(
        f"/api/reports/{created['id']}",
        json={"env_sequential_number": "ENV-1999-001"},
        headers=auth_headers,
    )
    assert response.status_code == 422


def test_get_and_update_missing_report(client, auth_headers):
    """Test 404 for unknown reports."""
    assert client.get("/api/reports/999", headers=auth_headers).status_code == 404

    response = client.patch("/api/reports/999", json={"status": "Traité"}, headers=auth_headers)
    assert response.status_code == 404
    assert response.json()["kind"] == "not_found"


def test_store_unavailable_maps_to_503(client, auth_headers, monkeypatch):
    """Test store failures reach the client with their kind."""

    def broken_list(self, limit=None, offset=0):
        from spill_registry.core.report_store import translate_store_error

        raise translate_store_error(OperationalError("SELECT", {}, Exception("connection refused")))

    monkeypatch.setattr(ReportStore, "list", broken_list)

    response = client.get("/api/reports/", headers=auth_headers)
    assert response.status_code == 503
    assert response.json()["kind"] == "store_unavailable"


def test_upload_photo_and_document(client, auth_headers):
    """Test attachment uploads return references to merge into the report."""
    created = client.post("/api/reports/", json={"location": "Parc"}, headers=auth_headers).json()

    photo = client.post(
        f"/api/reports/{created['id']}/photos",
        files={"file": ("site.jpg", b"jpeg", "image/jpeg")},
        headers=auth_headers,
    )
    assert photo.status_code == 200
    photo_url = photo.json()["url"]
    assert f"/files/reports/{created['id']}/photos/site.jpg-" in photo_url

    document = client.post(
        f"/api/reports/{created['id']}/documents",
        files={"file": ("analyse.pdf", b"%PDF", "application/pdf")},
        headers=auth_headers,
    )
    assert document.status_code == 200
    assert document.json()["type"] == "application/pdf"

    updated = client.patch(
        f"/api/reports/{created['id']}",
        json={"photo_urls": [photo_url], "documents": [document.json()]},
        headers=auth_headers,
    ).json()
    assert updated["photo_urls"] == [photo_url]
    assert updated["documents"][0]["name"] == "analyse.pdf"


def test_stats(client, auth_headers):
    """Test statistics endpoint."""
    client.post("/api/reports/", json={"date": "2024-02-10", "cause": "Bris"}, headers=auth_headers)
    created = client.post("/api/reports/", json={"date": "2024-05-01"}, headers=auth_headers).json()
    client.patch(f"/api/reports/{created['id']}", json={"status": "Annulé"}, headers=auth_headers)

    stats = client.get("/api/stats/", params={"year": 2024}, headers=auth_headers).json()

    assert stats["total"] == 2
    assert stats["active"] == 1
    assert stats["closed"] == 1
    assert stats["by_month"][1] == 1
    assert stats["by_month"][4] == 1


def test_intervenants(client, auth_headers, admin_headers):
    """Test directory listing and admin-only creation."""
    entry = {"name": "Service incendie", "role": "Municipal", "contact": "911", "organization": "Ville"}

    assert client.post("/api/intervenants/", json=entry, headers=auth_headers).status_code == 403
    assert client.post("/api/intervenants/", json=entry, headers=admin_headers).status_code == 201
    assert client.post("/api/intervenants/", json=entry, headers=admin_headers).status_code == 400

    listed = client.get("/api/intervenants/", params={"q": "incendie"}, headers=auth_headers).json()
    assert [i["name"] for i in listed] == ["Service incendie"]


def test_admin_users(client, auth_headers, admin_headers):
    """Test admin user management."""
    assert client.get("/api/admin/users", headers=auth_headers).status_code == 403

    response = client.post(
        "/api/admin/users",
        json={"email": "New.Agent@example.com", "password": "pw", "role": "user"},
        headers=admin_headers,
    )
    assert response.status_code == 201
    assert response.json()["email"] == "new.agent@example.com"

    emails = [u["email"] for u in client.get("/api/admin/users", headers=admin_headers).json()]
    assert "new.agent@example.com" in emails

    login = client.post("/api/token", data={"username": "new.agent@example.com", "password": "pw"})
    assert login.status_code == 200


def test_search_runs_before_pagination(client, auth_headers):
    """Test a search match outside the first page is still found."""
    target = client.post("/api/reports/", json={"location": "Garage municipal"}, headers=auth_headers).json()
    for _ in range(3):
        client.post("/api/reports/", json={"location": "Parc"}, headers=auth_headers)

    found = client.get("/api/reports/", params={"q": "garage", "limit": 1}, headers=auth_headers).json()
    assert [r["id"] for r in found] == [target["id"]]

    assert client.get("/api/reports/", params={"q": "garage", "offset": 1}, headers=auth_headers).json() == []


def test_report_pdf(client, auth_headers, monkeypatch):
    """Test PDF download headers and body."""
    monkeypatch.setattr("spill_registry.api.reports.render_report_pdf", lambda report: b"%PDF-1.7 test")
    created = client.post("/api/reports/", json={"location": "Parc"}, headers=auth_headers).json()

    response = client.get(f"/api/reports/{created['id']}/pdf", headers=auth_headers)

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.headers["content-disposition"] == (
        f'attachment; filename="rapport_{created["env_sequential_number"]}.pdf"'
    )
    assert response.content == b"%PDF-1.7 test"


def test_report_pdf_missing_report(client, auth_headers):
    """Test PDF export of an unknown report."""
    assert client.get("/api/reports/999/pdf", headers=auth_headers).status_code == 404
