"""End-to-end flows across auth, events, attendance and invitations."""
from tests.conftest import auth_headers, create_test_event, future_slot


def test_register_login_create_and_read_back(client):
    resp = client.post("/auth/register", json={"email": "host@example.com", "password": "pw-123"})
    assert resp.status_code == 201

    login = client.post("/auth/login", json={"email": "host@example.com", "password": "pw-123"})
    token = login.json()["token"]
    me = client.get("/auth/me", headers=auth_headers(token)).json()["data"]

    date_str, _ = future_slot(days=10)
    created = create_test_event(
        client, token, title="Picnic", description="", date=date_str, time="12:00:00", location="Park",
    )
    assert created.status_code == 201
    event_id = created.json()["data"]["id"]

    event = client.get(f"/events/{event_id}").json()["data"]
    assert event["title"] == "Picnic"
    assert event["date"] == date_str
    assert event["time"] == "12:00:00"
    assert event["location"] == "Park"
    assert event["organizer_id"] == me["id"]

    attendees = client.get(f"/events/{event_id}/attendees").json()["data"]
    assert [(a["user_id"], a["role"], a["status"]) for a in attendees] == [(me["id"], "organizer", "going")]


def test_direct_invite_then_status_change_shows_in_my_attending(client):
    client.post("/auth/register", json={"email": "a@example.com", "password": "pw"})
    client.post("/auth/register", json={"email": "b@example.com", "password": "pw"})
    token_a = client.post("/auth/login", json={"email": "a@example.com", "password": "pw"}).json()["token"]
    token_b = client.post("/auth/login", json={"email": "b@example.com", "password": "pw"}).json()["token"]
    b_id = client.get("/auth/me", headers=auth_headers(token_b)).json()["data"]["id"]

    event_id = create_test_event(client, token_a).json()["data"]["id"]
    invite = client.post(
        f"/events/{event_id}/invite",
        json={"user_id": b_id, "role": "attendee"},
        headers=auth_headers(token_a),
    )
    assert invite.status_code == 200

    attending = client.get("/events/my/attending", headers=auth_headers(token_b)).json()["data"]
    assert [(e["id"], e["status"]) for e in attending] == [(event_id, "going")]

    client.put(f"/events/{event_id}/attendance", json={"status": "not_going"}, headers=auth_headers(token_b))
    attending = client.get("/events/my/attending", headers=auth_headers(token_b)).json()["data"]
    assert attending[0]["status"] == "not_going"


def test_invitation_accept_then_organizer_deletes_event(client):
    client.post("/auth/register", json={"email": "host@example.com", "password": "pw"})
    client.post("/auth/register", json={"email": "guest@example.com", "password": "pw"})
    host = client.post("/auth/login", json={"email": "host@example.com", "password": "pw"}).json()["token"]
    guest = client.post("/auth/login", json={"email": "guest@example.com", "password": "pw"}).json()["token"]

    event_id = create_test_event(client, host).json()["data"]["id"]
    inv = client.post(
        "/invitations/",
        json={"event_id": event_id, "invitee_email": "guest@example.com", "role": "collaborator"},
        headers=auth_headers(host),
    ).json()["data"]
    client.put(f"/invitations/{inv['id']}/respond", json={"status": "accepted"}, headers=auth_headers(guest))

    attending = client.get("/events/my/attending", headers=auth_headers(guest)).json()["data"]
    assert attending[0]["role"] == "collaborator"

    assert client.delete(f"/events/{event_id}", headers=auth_headers(host)).status_code == 200
    assert client.get("/events/my/attending", headers=auth_headers(guest)).json() == {"data": []}
    assert client.get("/invitations/my", headers=auth_headers(guest)).json() == {"data": []}


def test_location_only_update_preserves_the_rest(client):
    client.post("/auth/register", json={"email": "host@example.com", "password": "pw"})
    token = client.post("/auth/login", json={"email": "host@example.com", "password": "pw"}).json()["token"]
    before = create_test_event(client, token).json()["data"]

    client.put(f"/events/{before['id']}", json={"location": "Rooftop"}, headers=auth_headers(token))
    after = client.get(f"/events/{before['id']}").json()["data"]

    assert after["location"] == "Rooftop"
    for field in ("title", "description", "date", "time", "organizer_id", "created_at"):
        assert after[field] == before[field]
