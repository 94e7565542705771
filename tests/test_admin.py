"""Admin API tests."""

from datetime import datetime

from conftest import INQUIRY_PAYLOAD


def _create_inquiries(client, count, **overrides):
    ids = []
    for n in range(count):
        response = client.post(
            "/api/inquiries", json={**INQUIRY_PAYLOAD, "subject": f"q{n}", **overrides}
        )
        ids.append(response.json()["data"]["id"])
    return ids


def test_admin_routes_reject_anonymous(client):
    """Test anonymous callers get 403 from the admin guard."""
    response = client.get("/api/admin/inquiries")
    assert response.status_code == 403
    assert response.json() == {"error": "Forbidden", "message": "Admin privileges required"}


def test_admin_routes_reject_users(client, user):
    """Test regular users get 403."""
    assert client.get("/api/admin/inquiries").status_code == 403
    assert client.put("/api/admin/inquiries/1", json={"status": "resolved"}).status_code == 403


def test_list_inquiries(client, admin_client):
    """Test the paged admin queue, newest first."""
    _create_inquiries(client, 3)

    response = admin_client.get("/api/admin/inquiries", params={"limit": 2})
    assert response.status_code == 200
    data = response.json()
    assert [i["subject"] for i in data["data"]] == ["q2", "q1"]
    assert data["pagination"] == {"page": 1, "limit": 2, "total": 3, "pages": 2}

    page_two = admin_client.get("/api/admin/inquiries", params={"limit": 2, "page": 2}).json()
    assert [i["subject"] for i in page_two["data"]] == ["q0"]


def test_list_inquiries_by_status(client, admin_client):
    """Test filtering by a free-form status."""
    first, second = _create_inquiries(client, 2)
    admin_client.put(f"/api/admin/inquiries/{first}", json={"status": "waiting on supplier"})

    response = admin_client.get(
        "/api/admin/inquiries", params={"status": "waiting on supplier"}
    )
    data = response.json()
    assert [i["id"] for i in data["data"]] == [first]
    assert data["pagination"]["total"] == 1


def test_list_inquiries_bad_paging(client, admin_client):
    """Test invalid paging parameters are validation errors."""
    response = admin_client.get("/api/admin/inquiries", params={"page": 0})
    assert response.status_code == 400


def test_resolve_inquiry(client, admin_client):
    """Test the create -> resolve round trip."""
    created = client.post("/api/inquiries", json=INQUIRY_PAYLOAD).json()["data"]

    response = admin_client.put(
        f"/api/admin/inquiries/{created['id']}", json={"status": "resolved", "read": True}
    )
    assert response.status_code == 200
    updated = response.json()["data"]
    assert updated["status"] == "resolved"
    assert updated["read"] is True

    listed = admin_client.get("/api/admin/inquiries").json()["data"][0]
    assert listed["id"] == created["id"]
    assert listed["status"] == "resolved"
    assert datetime.fromisoformat(listed["updated_at"]) > datetime.fromisoformat(
        created["created_at"]
    )


def test_mark_read_keeps_status(client, admin_client):
    """Test updating only the read flag."""
    (inquiry_id,) = _create_inquiries(client, 1)
    response = admin_client.put(f"/api/admin/inquiries/{inquiry_id}", json={"read": True})
    data = response.json()["data"]
    assert data["read"] is True
    assert data["status"] == "new"


def test_update_missing_inquiry(client, admin_client):
    """Test unknown inquiry ids are 404."""
    response = admin_client.put("/api/admin/inquiries/9999", json={"status": "resolved"})
    assert response.status_code == 404
    assert response.json()["message"] == "Inquiry not found"


def test_update_invalid_inquiry_id(client, admin_client):
    """Test malformed inquiry ids are 400."""
    response = admin_client.put("/api/admin/inquiries/not-an-id", json={"status": "resolved"})
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid inquiry ID format"


def test_update_inquiry_unicode_digit_id(client, admin_client):
    """Test unicode digits in an inquiry id are 400."""
    response = admin_client.put("/api/admin/inquiries/²", json={"status": "resolved"})
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid inquiry ID format"


def test_update_inquiry_rejects_unknown_fields(client, admin_client):
    """Test misnamed keys in an inquiry update are rejected."""
    inquiry_id = _create_inquiries(client, 1)[0]
    response = admin_client.put(f"/api/admin/inquiries/{inquiry_id}", json={"state": "resolved"})
    assert response.status_code == 400

    listing = admin_client.get("/api/admin/inquiries").json()["data"]
    assert listing[0]["status"] == "new"
