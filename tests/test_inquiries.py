"""Inquiry API and service tests."""

from conftest import register

from storefront.models import Inquiry, User
from storefront.schemas.inquiry import InquiryCreate
from storefront.services.inquiry import InquiryService

INQUIRY = {
    "name": "Asha",
    "email": "asha@example.com",
    "phone": "555-0101",
    "subject": "Bulk order",
    "message": "Do you deliver 50kg rice bags?",
}


def test_create_anonymous_inquiry(client):
    """Test visitors can submit inquiries without an account."""
    response = client.post("/api/inquiries", json=INQUIRY)
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["subject"] == "Bulk order"
    assert data["status"] == "new"
    assert data["read"] is False
    assert data["user_id"] is None


def test_create_inquiry_owned_by_session_user(client, user):
    """Test logged-in submitters own their inquiry."""
    response = client.post("/api/inquiries", json=INQUIRY)
    assert response.status_code == 201
    assert response.json()["data"]["user_id"] == user["id"]


def test_create_inquiry_ignores_client_user_id(client, user, new_client):
    """Test anonymous callers cannot attribute inquiries to someone else."""
    response = new_client().post("/api/inquiries", json={**INQUIRY, "user_id": user["id"]})
    assert response.status_code == 201
    assert response.json()["data"]["user_id"] is None


def test_create_inquiry_without_message(client, db):
    """Test a missing message is rejected and nothing is stored."""
    payload = {k: v for k, v in INQUIRY.items() if k != "message"}
    response = client.post("/api/inquiries", json=payload)
    assert response.status_code == 400
    assert response.json()["error"] == "Validation Error"
    assert db.query(Inquiry).count() == 0


def test_create_inquiry_blank_message(client, db):
    """Test a whitespace-only message is rejected."""
    response = client.post("/api/inquiries", json={**INQUIRY, "message": "   "})
    assert response.status_code == 400
    assert response.json()["message"] == "Name, email, subject and message are required"
    assert db.query(Inquiry).count() == 0


def test_duplicate_inquiries_allowed(client):
    """Test the same inquiry can be sent twice."""
    assert client.post("/api/inquiries", json=INQUIRY).status_code == 201
    assert client.post("/api/inquiries", json=INQUIRY).status_code == 201


def test_list_my_inquiries(client, user, new_client):
    """Test users only see their own inquiries, newest first."""
    other = new_client()
    register(other, email="other@example.com")

    client.post("/api/inquiries", json={**INQUIRY, "subject": "first"})
    other.post("/api/inquiries", json={**INQUIRY, "subject": "not mine"})
    client.post("/api/inquiries", json={**INQUIRY, "subject": "second"})
    new_client().post("/api/inquiries", json={**INQUIRY, "subject": "anonymous"})

    response = client.get("/api/user/inquiries")
    assert response.status_code == 200
    data = response.json()
    assert data["count"] == 2
    assert [i["subject"] for i in data["data"]] == ["second", "first"]


def test_list_my_inquiries_empty(client, user):
    """Test no inquiries is an empty list."""
    response = client.get("/api/user/inquiries")
    assert response.status_code == 200
    assert response.json() == {"success": True, "data": [], "count": 0}


def test_list_my_inquiries_requires_login(client):
    """Test the user guard."""
    response = client.get("/api/user/inquiries")
    assert response.status_code == 401


class TestInquiryService:
    """Tests for InquiryService used directly."""

    def _users(self, db, count):
        users = [
            User(name=f"U{i}", email=f"u{i}@example.com", password_hash="x") for i in range(count)
        ]
        db.add_all(users)
        db.commit()
        return [u.id for u in users]

    def test_list_for_user_interleaved(self, db):
        """Test ownership filtering and ordering across interleaved creates."""
        service = InquiryService(db)
        alice, bob = self._users(db, 2)
        owners = [alice, bob, None, alice, bob, alice]
        created = [
            service.create(InquiryCreate(**{**INQUIRY, "subject": f"s{n}"}), owner)
            for n, owner in enumerate(owners)
        ]

        alice_list = service.list_for_user(alice)
        assert [i.id for i in alice_list] == [created[5].id, created[3].id, created[0].id]
        assert all(i.user_id == alice for i in alice_list)
        assert [i.id for i in service.list_for_user(bob)] == [created[4].id, created[1].id]

    def test_list_for_user_unknown(self, db):
        """Test an unknown user simply has no inquiries."""
        assert InquiryService(db).list_for_user(12345) == []

    def test_list_for_admin_pages(self, db):
        """Test paging and status filtering."""
        service = InquiryService(db)
        for n in range(5):
            service.create(InquiryCreate(**{**INQUIRY, "subject": f"s{n}"}))

        page, total = service.list_for_admin(page=2, limit=2)
        assert total == 5
        assert [i.subject for i in page] == ["s2", "s1"]

        new_only, total_new = service.list_for_admin(status="new")
        assert total_new == 5
        resolved, total_resolved = service.list_for_admin(status="resolved")
        assert (resolved, total_resolved) == ([], 0)
