import recruitment.main as main_mod
import recruitment.routers.auth as auth_mod


def test_auth_rate_limit_blocks_excess_requests(monkeypatch, client):
    monkeypatch.setattr(main_mod.settings, "rate_limit_auth_per_min", 2)
    monkeypatch.setattr(auth_mod, "get_by_email", lambda db, email: None)

    payload = {"email": "x@example.com", "password": "bad-password", "role": "APPLICANT"}
    r1 = client.post("/api/auth/login", json=payload)
    r2 = client.post("/api/auth/login", json=payload)
    r3 = client.post("/api/auth/login", json=payload)

    assert r1.status_code == 401
    assert r2.status_code == 401
    assert r3.status_code == 429
    assert r3.json() == {"success": False, "error": "Too many requests. Please retry shortly."}
    assert int(r3.headers["Retry-After"]) >= 1


def test_unguarded_routes_are_not_limited(monkeypatch, client):
    monkeypatch.setattr(main_mod.settings, "rate_limit_auth_per_min", 1)
    for _ in range(3):
        assert client.get("/health/live").status_code == 200
