"""
Tests for testimonial submission and moderation endpoints
"""
from uuid import uuid4

TESTIMONIAL = {
    "name": "Jean Bosco",
    "email": "jean@example.org",
    "company": "Kigali Builders",
    "position": "Director",
    "message": "The team delivered the school project on time and with care.",
    "rating": 5,
}


def _create(client, **fields):
    payload = dict(TESTIMONIAL)
    payload.update(fields)
    response = client.post("/api/testimonials", json=payload)
    assert response.status_code == 201, response.json()
    return response.json()["data"]


def test_create_testimonial_is_pending(client, mailbox):
    data = _create(client)
    assert data["isApproved"] is False
    assert data["featured"] is False
    assert data["approvedAt"] is None
    assert data["approvedBy"] is None
    
    assert len(mailbox.sent) == 1
    assert mailbox.sent[0].reply_to == "jean@example.org"


def test_create_testimonial_cannot_self_approve(client, db_session):
    payload = dict(TESTIMONIAL, isApproved=True, featured=True)
    response = client.post("/api/testimonials", json=payload)
    assert response.status_code == 400


def test_create_testimonial_rating_bounds(client, db_session):
    assert client.post("/api/testimonials", json=dict(TESTIMONIAL, rating=6)).status_code == 400
    assert client.post("/api/testimonials", json=dict(TESTIMONIAL, rating=0)).status_code == 400


def test_approve_and_reject_pair_fields(client, admin, auth_headers):
    testimonial = _create(client)
    url = f"/api/testimonials/{testimonial['id']}"
    
    approved = client.patch(f"{url}/approve", headers=auth_headers).json()["data"]
    assert approved["isApproved"] is True
    assert approved["approvedAt"] is not None
    assert approved["approvedBy"] == str(admin.id)
    assert approved["approver"]["email"] == admin.email
    
    again = client.patch(f"{url}/approve", headers=auth_headers).json()["data"]
    assert again["approvedAt"] == approved["approvedAt"]
    
    rejected = client.patch(f"{url}/reject", headers=auth_headers).json()["data"]
    assert rejected["isApproved"] is False
    assert rejected["approvedAt"] is None
    assert rejected["approvedBy"] is None


def test_update_follows_approval_pairing(client, admin, auth_headers):
    testimonial = _create(client)
    url = f"/api/testimonials/{testimonial['id']}"
    
    approved = client.put(
        url,
        json={"isApproved": True, "company": "Kigali Builders Ltd"},
        headers=auth_headers,
    ).json()["data"]
    assert approved["approvedBy"] == str(admin.id)
    assert approved["approvedAt"] is not None
    assert approved["company"] == "Kigali Builders Ltd"
    
    cleared = client.put(url, json={"isApproved": False}, headers=auth_headers).json()["data"]
    assert cleared["approvedAt"] is None
    assert cleared["approvedBy"] is None


def test_toggle_featured_leaves_approval_alone(client, auth_headers):
    testimonial = _create(client)
    url = f"/api/testimonials/{testimonial['id']}/featured"
    
    featured = client.patch(url, headers=auth_headers).json()["data"]
    assert featured["featured"] is True
    assert featured["isApproved"] is False
    
    unfeatured = client.patch(url, headers=auth_headers).json()["data"]
    assert unfeatured["featured"] is False


def test_public_list_shows_only_approved(client, auth_headers):
    pending = _create(client, name="Pending Person")
    approved = _create(client, name="Approved Person")
    featured = _create(client, name="Featured Person")
    client.patch(f"/api/testimonials/{approved['id']}/approve", headers=auth_headers)
    client.patch(f"/api/testimonials/{featured['id']}/approve", headers=auth_headers)
    client.patch(f"/api/testimonials/{featured['id']}/featured", headers=auth_headers)
    client.patch(f"/api/testimonials/{pending['id']}/featured", headers=auth_headers)
    
    response = client.get("/api/testimonials/approved").json()
    assert [t["name"] for t in response["data"]] == ["Featured Person", "Approved Person"]
    assert "email" not in response["data"][0]
    assert "approvedBy" not in response["data"][0]
    
    only_featured = client.get("/api/testimonials/approved", params={"featured": "true"}).json()
    assert [t["name"] for t in only_featured["data"]] == ["Featured Person"]


def test_admin_list_orders_featured_first(client, auth_headers):
    older = _create(client, name="Older Featured")
    _create(client, name="Newer Plain")
    client.patch(f"/api/testimonials/{older['id']}/featured", headers=auth_headers)
    
    response = client.get("/api/testimonials", headers=auth_headers).json()
    assert [t["name"] for t in response["data"]] == ["Older Featured", "Newer Plain"]
    
    pending = client.get("/api/testimonials", params={"isApproved": "false"}, headers=auth_headers).json()
    assert pending["pagination"]["total"] == 2
    
    search = client.get("/api/testimonials", params={"search": "newer"}, headers=auth_headers).json()
    assert [t["name"] for t in search["data"]] == ["Newer Plain"]


def test_get_by_id_hides_pending_from_anonymous(client, auth_headers):
    testimonial = _create(client)
    url = f"/api/testimonials/{testimonial['id']}"
    
    assert client.get(url).status_code == 404
    
    as_admin = client.get(url, headers=auth_headers)
    assert as_admin.status_code == 200
    assert as_admin.json()["data"]["email"] == "jean@example.org"
    
    client.patch(f"{url}/approve", headers=auth_headers)
    public = client.get(url)
    assert public.status_code == 200
    assert "email" not in public.json()["data"]


def test_admin_routes_require_auth(client, db_session):
    testimonial_id = uuid4()
    assert client.get("/api/testimonials").status_code == 401
    assert client.get("/api/testimonials/stats").status_code == 401
    assert client.patch(f"/api/testimonials/{testimonial_id}/approve").status_code == 401
    assert client.delete(f"/api/testimonials/{testimonial_id}").status_code == 401


def test_testimonial_stats(client, auth_headers):
    approved = _create(client)
    featured_pending = _create(client)
    _create(client)
    client.patch(f"/api/testimonials/{approved['id']}/approve", headers=auth_headers)
    client.patch(f"/api/testimonials/{approved['id']}/featured", headers=auth_headers)
    client.patch(f"/api/testimonials/{featured_pending['id']}/featured", headers=auth_headers)
    
    response = client.get("/api/testimonials/stats", headers=auth_headers)
    assert response.json()["data"] == {"total": 3, "approved": 1, "pending": 2, "featured": 1}


def test_delete_testimonial(client, auth_headers):
    testimonial = _create(client)
    url = f"/api/testimonials/{testimonial['id']}"
    assert client.delete(url, headers=auth_headers).status_code == 200
    assert client.delete(url, headers=auth_headers).status_code == 404
