from __future__ import annotations


def test_dashboard_stats_api_returns_four_points(client, login_as):
    login_as("staff-1", role="staff")

    resp = client.get("/api/dashboard/stats")

    body = resp.get_json()
    assert resp.status_code == 200
    assert body["success"] is True
    assert len(body["data"]) == 4
    assert set(body["data"][0]) == {"date", "label", "count"}


def test_dashboard_forbidden_for_plain_user(client, login_as):
    login_as("user-1")

    assert client.get("/admin/dashboard").status_code == 403
    assert client.get("/api/dashboard/stats").status_code == 403


def test_admin_home_hides_user_management_from_staff(client, login_as):
    login_as("staff-1", role="staff")

    resp = client.get("/admin")

    assert resp.status_code == 200
    assert "출석 현황판".encode() in resp.data
    assert b"/admin/users" not in resp.data


def test_admin_home_shows_user_management_to_admin(client, login_as):
    login_as("admin-1", role="admin")

    resp = client.get("/admin")

    assert b"/admin/users" in resp.data
