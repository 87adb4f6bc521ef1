import recruitment.routers.users as users_mod
from conftest import StubUser


def test_list_users_filters_by_role(monkeypatch, client):
    seen = {}

    def fake_all(db, role=None):
        seen["role"] = role
        return [StubUser(id="h1", role="HR")]

    monkeypatch.setattr(users_mod, "get_all_users", fake_all)
    resp = client.get("/api/users?role=hr")
    assert resp.status_code == 200
    assert seen["role"] == "HR"
    assert resp.json()["data"][0]["id"] == "h1"


def test_get_user_not_found(monkeypatch, client):
    monkeypatch.setattr(users_mod, "get_by_id", lambda db, uid: None)
    resp = client.get("/api/users/missing")
    assert resp.status_code == 404


def test_create_staff_requires_admin(client, hr_client):
    payload = {
        "email": "staff@example.com",
        "password": "password123",
        "first_name": "Tom",
        "last_name": "Kalua",
        "role": "HR",
    }
    assert client.post("/api/users", json=payload).status_code == 403
    assert hr_client.post("/api/users", json=payload).status_code == 403


def test_admin_creates_staff_account(monkeypatch, admin_client):
    monkeypatch.setattr(users_mod, "get_by_email", lambda db, email: None)
    monkeypatch.setattr(
        users_mod,
        "create_user",
        lambda db, email, password, first, last, role, position: StubUser(
            id="s1", email=email, first_name=first, last_name=last, role=role, position=position
        ),
    )
    resp = admin_client.post(
        "/api/users",
        json={
            "email": "staff@example.com",
            "password": "password123",
            "first_name": "tom",
            "last_name": "kalua",
            "role": "hr",
            "position": "Recruitment Officer",
        },
    )
    assert resp.status_code == 201
    data = resp.json()["data"]
    assert data["role"] == "HR"
    assert data["position"] == "Recruitment Officer"


def test_update_other_user_requires_admin(client):
    resp = client.put("/api/users/someone-else", json={"first_name": "Alice"})
    assert resp.status_code == 403


def test_non_admin_cannot_change_own_role(client, applicant_user):
    resp = client.put(f"/api/users/{applicant_user.id}", json={"role": "ADMIN"})
    assert resp.status_code == 403


def test_update_rejects_email_taken_by_other(monkeypatch, client, applicant_user):
    monkeypatch.setattr(users_mod, "get_by_email", lambda db, email: StubUser(id="other"))
    resp = client.put(f"/api/users/{applicant_user.id}", json={"email": "taken@example.com"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Email already exists"


def test_update_self_hashes_new_password(monkeypatch, client, applicant_user):
    captured = {}

    def fake_update(db, uid, **kwargs):
        captured.update(kwargs)
        return applicant_user

    monkeypatch.setattr(users_mod, "hash_password", lambda p: f"hashed:{p}")
    monkeypatch.setattr(users_mod, "update_user", fake_update)
    resp = client.put(f"/api/users/{applicant_user.id}", json={"password": "new-password-1"})
    assert resp.status_code == 200
    assert captured["password_hash"] == "hashed:new-password-1"
    assert captured["role"] is None


def test_admin_cannot_delete_self(admin_client, admin_user):
    resp = admin_client.delete(f"/api/users/{admin_user.id}")
    assert resp.status_code == 400


def test_admin_deletes_user(monkeypatch, admin_client):
    monkeypatch.setattr(users_mod, "delete_user", lambda db, uid: uid == "u2")
    assert admin_client.delete("/api/users/u2").status_code == 200
    assert admin_client.delete("/api/users/u3").status_code == 404
