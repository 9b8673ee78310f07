from src.church_attendance.church_attendance.core.enums import Role
from src.church_attendance.church_attendance.navigation.menu import build_menu


def _endpoints(role):
    return [item.endpoint for item in build_menu(role)]


def test_logged_out_menu_is_empty():
    assert build_menu(None) == []


def test_user_menu():
    assert _endpoints(Role.USER) == ["home", "mypage", "attendance_index"]


def test_staff_menu_has_admin_home_only():
    assert _endpoints(Role.STAFF) == ["home", "mypage", "attendance_index", "admin_home"]


def test_admin_menu_has_user_management():
    assert _endpoints(Role.ADMIN)[-2:] == ["admin_home", "admin_users"]


def test_home_page_renders_for_anonymous(client):
    resp = client.get("/")

    assert resp.status_code == 200
    assert "로그인".encode() in resp.data
