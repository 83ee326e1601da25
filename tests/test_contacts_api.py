"""
Tests for contact submission and read-state endpoints
"""
from uuid import uuid4

CONTACT = {
    "name": "Amara Okafor",
    "email": "amara@example.org",
    "subject": "Volunteering",
    "message": "I would like to volunteer at the next water project.",
}


def _create(client, **fields):
    payload = dict(CONTACT)
    payload.update(fields)
    response = client.post("/api/contacts", json=payload, headers={"User-Agent": "pytest-browser"})
    assert response.status_code == 201, response.json()
    return response.json()["data"]


def test_create_contact_is_public_and_unread(client, mailbox):
    data = _create(client)
    assert data["isRead"] is False
    assert data["readAt"] is None
    assert data["userAgent"] == "pytest-browser"
    assert data["ipAddress"]
    
    assert len(mailbox.sent) == 1
    notification = mailbox.sent[0]
    assert notification.to == "owner@example.org"
    assert notification.reply_to == "amara@example.org"
    assert notification.subject == "New Contact: Volunteering"


def test_create_contact_survives_email_failure(client, mailbox):
    mailbox.fail = True
    data = _create(client)
    assert data["name"] == "Amara Okafor"


def test_create_contact_validation(client, db_session):
    response = client.post("/api/contacts", json={"name": "A", "email": "nope", "message": "short"})
    assert response.status_code == 400
    fields = {e["field"] for e in response.json()["errors"]}
    assert {"name", "email", "message"} <= fields


def test_admin_routes_require_auth(client, db_session):
    contact_id = uuid4()
    assert client.get("/api/contacts").status_code == 401
    assert client.get("/api/contacts/stats").status_code == 401
    assert client.get(f"/api/contacts/{contact_id}").status_code == 401
    assert client.patch(f"/api/contacts/{contact_id}/read").status_code == 401
    assert client.delete(f"/api/contacts/{contact_id}").status_code == 401


def test_mark_read_then_unread(client, auth_headers):
    contact = _create(client)
    url = f"/api/contacts/{contact['id']}"
    
    read = client.patch(f"{url}/read", headers=auth_headers).json()["data"]
    assert read["isRead"] is True
    assert read["readAt"] is not None
    
    again = client.patch(f"{url}/read", headers=auth_headers).json()["data"]
    assert again["readAt"] == read["readAt"]
    
    unread = client.patch(f"{url}/unread", headers=auth_headers).json()["data"]
    assert unread["isRead"] is False
    assert unread["readAt"] is None


def test_update_contact_read_state(client, auth_headers):
    contact = _create(client)
    url = f"/api/contacts/{contact['id']}"
    
    read = client.put(url, json={"isRead": True}, headers=auth_headers).json()["data"]
    assert read["isRead"] is True
    assert read["readAt"] is not None
    
    unread = client.put(url, json={"isRead": False}, headers=auth_headers).json()["data"]
    assert unread["readAt"] is None


def test_update_contact_rejects_other_fields(client, auth_headers):
    contact = _create(client)
    response = client.put(
        f"/api/contacts/{contact['id']}",
        json={"message": "Edited by an admin, which is not allowed"},
        headers=auth_headers,
    )
    assert response.status_code == 400


def test_list_contacts_filters_and_search(client, auth_headers):
    first = _create(client)
    _create(client, name="Jean Bosco", email="jean@example.org", subject="Donation")
    client.patch(f"/api/contacts/{first['id']}/read", headers=auth_headers)
    
    unread = client.get("/api/contacts", params={"isRead": "false"}, headers=auth_headers).json()
    assert [c["name"] for c in unread["data"]] == ["Jean Bosco"]
    
    search = client.get("/api/contacts", params={"search": "DONATION"}, headers=auth_headers).json()
    assert [c["name"] for c in search["data"]] == ["Jean Bosco"]
    
    everything = client.get("/api/contacts", headers=auth_headers).json()
    assert [c["name"] for c in everything["data"]] == ["Jean Bosco", "Amara Okafor"]
    assert everything["pagination"]["total"] == 2


def test_contact_stats(client, auth_headers):
    first = _create(client)
    _create(client)
    _create(client)
    client.patch(f"/api/contacts/{first['id']}/read", headers=auth_headers)
    
    response = client.get("/api/contacts/stats", headers=auth_headers)
    assert response.json()["data"] == {"total": 3, "read": 1, "unread": 2}


def test_not_found_and_bad_id_are_distinct(client, auth_headers):
    missing = client.get(f"/api/contacts/{uuid4()}", headers=auth_headers)
    assert missing.status_code == 404
    assert missing.json()["message"] == "Contact not found"
    
    malformed = client.get("/api/contacts/not-a-uuid", headers=auth_headers)
    assert malformed.status_code == 400


def test_delete_contact(client, auth_headers):
    contact = _create(client)
    url = f"/api/contacts/{contact['id']}"
    assert client.delete(url, headers=auth_headers).status_code == 200
    assert client.get(url, headers=auth_headers).status_code == 404
