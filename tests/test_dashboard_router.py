from recruitment.routers import dashboard


def test_stats_for_hr(hr_client, monkeypatch):
    stats = {"users": {"APPLICANT": 3, "HR": 1, "ADMIN": 1}, "users_total": 5, "active_jobs": 2}
    monkeypatch.setattr(dashboard, "get_stats", lambda db: stats)
    resp = hr_client.get("/api/dashboard/stats")
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "data": stats}


def test_admin_passes_hr_check(admin_client, monkeypatch):
    monkeypatch.setattr(dashboard, "get_stats", lambda db: {})
    assert admin_client.get("/api/dashboard/stats").status_code == 200


def test_stats_forbidden_for_applicant(client):
    resp = client.get("/api/dashboard/stats")
    assert resp.status_code == 403
    assert resp.json() == {"success": False, "error": "HR access required"}
