def _headers(user_id, name=None, email=None):
    headers = {"X-Dev-User": user_id}
    if name:
        headers["X-Forwarded-Name"] = name
    if email:
        headers["X-Forwarded-Email"] = email
    return headers


ALICE = _headers("alice", "Alice", "alice@example.com")
BOB = _headers("bob", "Bob", "bob@example.com")
CAROL = _headers("carol", "Carol", "carol@example.com")


def _register(client, headers, name):
    response = client.post("/v1/me", json={"name": name}, headers=headers)
    assert response.status_code == 200
    return response.json()


def test_register_and_read_profile(client):
    profile = _register(client, ALICE, "Alice")
    assert profile["id"] == "alice"
    assert profile["name"] == "Alice"
    assert profile["email"] == "alice@example.com"
    assert profile["familyId"]

    again = client.get("/v1/me", headers=ALICE)
    assert again.status_code == 200
    assert again.json()["familyId"] == profile["familyId"]

    family = client.get("/v1/family", headers=ALICE).json()
    assert family["id"] == profile["familyId"]
    assert family["members"] == [{"id": "alice", "name": "Alice", "email": "alice@example.com"}]
    assert family["monthlyLimit"] == 2000
    assert family["warningPercentage"] == 20
    assert family["expenses"] == []
    assert family["categories"] == []


def test_missing_names_render_as_unknown(client):
    family = client.get("/v1/family", headers=_headers("dana")).json()
    assert family["members"] == [{"id": "dana", "name": "Unknown", "email": "Unknown"}]

    invitation = client.post("/v1/invitations", json={"toUserId": "nobody"}, headers=ALICE)
    assert invitation.status_code == 201
    assert invitation.json()["toUserName"] == "Unknown"
    assert invitation.json()["fromUserName"] == "Alice"


def test_invite_accept_remove_scenario(client):
    f1 = _register(client, ALICE, "Alice")["familyId"]
    f2 = _register(client, BOB, "Bob")["familyId"]

    category = client.post("/v1/categories", json={"name": "Fuel", "color": "#ff0000"}, headers=BOB).json()
    expense = client.post(
        "/v1/expenses",
        json={"amount": 42.5, "categoryId": category["id"], "date": "2026-10-01"},
        headers=BOB,
    )
    assert expense.status_code == 201
    assert expense.json()["userName"] == "Bob"
    assert expense.json()["currency"] == "EUR"
    expense_id = expense.json()["id"]

    invitation = client.post("/v1/invitations", json={"toUserId": "bob"}, headers=ALICE).json()
    assert invitation["status"] == "pending"
    assert [item["id"] for item in client.get("/v1/invitations/pending", headers=BOB).json()["items"]] == [
        invitation["id"]
    ]
    assert [item["id"] for item in client.get("/v1/invitations/sent", headers=ALICE).json()["items"]] == [
        invitation["id"]
    ]

    accepted = client.post(f"/v1/invitations/{invitation['id']}/accept", headers=BOB)
    assert accepted.status_code == 200
    joined = accepted.json()
    assert joined["id"] == f1
    assert sorted(member["id"] for member in joined["members"]) == ["alice", "bob"]
    assert [item["id"] for item in joined["expenses"]] == [expense_id]
    assert [item["id"] for item in joined["categories"]] == [category["id"]]
    assert client.get("/v1/me", headers=BOB).json()["familyId"] == f1
    assert client.get("/v1/invitations/pending", headers=BOB).json()["items"] == []

    removed = client.delete("/v1/family/members/bob", headers=ALICE)
    assert removed.status_code == 200
    remaining = removed.json()
    assert remaining["id"] == f1
    assert [member["id"] for member in remaining["members"]] == ["alice"]
    assert remaining["expenses"] == []

    f3 = client.get("/v1/me", headers=BOB).json()["familyId"]
    assert f3 not in (f1, f2)
    bob_family = client.get("/v1/family", headers=BOB).json()
    assert [member["id"] for member in bob_family["members"]] == ["bob"]
    assert [item["id"] for item in bob_family["expenses"]] == [expense_id]
    assert bob_family["monthlyLimit"] is None


def test_invitation_error_statuses(client):
    _register(client, ALICE, "Alice")
    _register(client, BOB, "Bob")
    invitation = client.post("/v1/invitations", json={"toUserId": "bob"}, headers=ALICE).json()

    forbidden = client.post(f"/v1/invitations/{invitation['id']}/accept", headers=CAROL)
    assert forbidden.status_code == 403
    assert forbidden.json() == {"detail": "not authorized to act on this invitation"}

    missing = client.post("/v1/invitations/unknown/reject", headers=BOB)
    assert missing.status_code == 404

    rejected = client.post(f"/v1/invitations/{invitation['id']}/reject", headers=BOB)
    assert rejected.status_code == 200
    assert rejected.json()["status"] == "rejected"

    again = client.post(f"/v1/invitations/{invitation['id']}/reject", headers=BOB)
    assert again.status_code == 409
    assert again.json() == {"detail": "invitation is already rejected"}

    self_invite = client.post("/v1/invitations", json={"toUserId": "alice"}, headers=ALICE)
    assert self_invite.status_code == 409


def test_remove_member_error_statuses(client):
    _register(client, ALICE, "Alice")
    assert client.delete("/v1/family/members/bob", headers=ALICE).status_code == 404
    assert client.delete("/v1/family/members/alice", headers=ALICE).status_code == 409


def test_family_members_projection_and_update(client):
    _register(client, ALICE, "Alice")
    _register(client, BOB, "Bob")

    members = client.get("/v1/family/members", params={"ids": ["bob", "ghost"]}, headers=ALICE).json()
    assert members["items"] == [
        {"id": "bob", "name": "Bob", "email": "bob@example.com"},
        {"id": "ghost", "name": "Unknown", "email": "Unknown"},
    ]

    invitation = client.post("/v1/invitations", json={"toUserId": "bob"}, headers=ALICE).json()
    client.post(f"/v1/invitations/{invitation['id']}/accept", headers=BOB)
    updated = client.patch("/v1/family/members/bob", json={"name": "Robert"}, headers=ALICE)
    assert updated.status_code == 200
    assert updated.json() == {"id": "bob", "name": "Robert", "email": "bob@example.com"}

    search = client.get("/v1/users/search", params={"q": "rob"}, headers=ALICE)
    assert search.status_code == 200
    assert search.json()["items"] == []
    search = client.get("/v1/users/search", params={"q": "bo"}, headers=ALICE)
    assert [item["id"] for item in search.json()["items"]] == ["bob"]


def test_expense_and_category_crud(client):
    _register(client, ALICE, "Alice")
    _register(client, BOB, "Bob")
    foreign_category = client.post("/v1/categories", json={"name": "Other", "color": "#000"}, headers=BOB).json()

    category = client.post("/v1/categories", json={"name": "Food", "color": "#0f0"}, headers=ALICE)
    assert category.status_code == 201
    assert category.json()["userId"] == "alice"
    category_id = category.json()["id"]

    bad = client.post(
        "/v1/expenses",
        json={"amount": 5, "categoryId": foreign_category["id"], "date": "2026-10-01"},
        headers=ALICE,
    )
    assert bad.status_code == 404

    first = client.post(
        "/v1/expenses",
        json={"amount": 5, "categoryId": category_id, "date": "2026-10-01", "currency": "usd"},
        headers=ALICE,
    ).json()
    assert first["currency"] == "USD"
    second = client.post("/v1/expenses", json={"amount": 8, "date": "2026-10-03"}, headers=ALICE).json()

    listed = client.get("/v1/expenses", headers=ALICE).json()["items"]
    assert [item["id"] for item in listed] == [second["id"], first["id"]]

    updated = client.patch(f"/v1/expenses/{first['id']}", json={"amount": 6.5, "date": "2026-10-05"}, headers=ALICE)
    assert updated.status_code == 200
    assert updated.json()["amount"] == 6.5
    assert updated.json()["date"] == "2026-10-05"

    assert client.patch(f"/v1/expenses/{first['id']}", json={"amount": 1}, headers=BOB).status_code == 404
    assert client.delete(f"/v1/expenses/{first['id']}", headers=ALICE).status_code == 204
    assert client.delete(f"/v1/expenses/{first['id']}", headers=ALICE).status_code == 404

    categories = client.get("/v1/categories", headers=ALICE).json()["items"]
    assert [item["name"] for item in categories] == ["Food"]

    invalid = client.post("/v1/expenses", json={"amount": -1, "date": "2026-10-01"}, headers=ALICE)
    assert invalid.status_code == 422


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"ok": True}


def test_self_removal_returns_callers_new_family(client):
    family_id = _register(client, ALICE, "Alice")["familyId"]
    _register(client, BOB, "Bob")
    client.post("/v1/expenses", json={"amount": 3, "date": "2026-10-02"}, headers=ALICE)
    invitation = client.post("/v1/invitations", json={"toUserId": "bob"}, headers=ALICE).json()
    client.post(f"/v1/invitations/{invitation['id']}/accept", headers=BOB)

    removed = client.delete("/v1/family/members/bob", headers=BOB)
    assert removed.status_code == 200
    own = removed.json()
    assert own["id"] != family_id
    assert own["id"] == client.get("/v1/me", headers=BOB).json()["familyId"]
    assert [member["id"] for member in own["members"]] == ["bob"]
    assert own["expenses"] == []
