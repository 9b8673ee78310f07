from __future__ import annotations

import logging

from flask import Flask, flash, g, jsonify, render_template

from ..common.datetime_utils import today_local
from ..core.enums import Role
from ..core.exceptions import StoreError
from ..container import Container
from ..profiles.decorators import access_required
from ..profiles.guard import is_admin_or_staff
from .service import Overview

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    guard = container.guard
    stats = container.statistics_service

    @app.route("/admin", endpoint="admin_home")
    @access_required(guard, is_admin_or_staff, denied_message="관리자 또는 스태프 권한이 필요합니다.")
    def admin_home():
        try:
            overview = stats.overview(today_local())
        except StoreError as e:
            flash(str(e), "danger")
            overview = Overview(total_users=0, total_attendance=0, today_attendance=0)

        cards = [
            {"endpoint": "admin_dashboard", "title": "출석 현황판", "description": "최근 4주간 주일 출석 현황", "admin_only": False},
            {"endpoint": "admin_users", "title": "사용자 관리", "description": "권한, 부서, 승인 관리", "admin_only": True},
        ]
        cards = [c for c in cards if not c["admin_only"] or g.profile.role == Role.ADMIN]
        return render_template("admin/home.html", profile=g.profile, overview=overview, cards=cards, active_page="admin_home")

    @app.route("/admin/dashboard", endpoint="admin_dashboard")
    @access_required(guard, is_admin_or_staff, denied_message="관리자 또는 스태프 권한이 필요합니다.")
    def admin_dashboard():
        series = [point.to_dict() for point in stats.sunday_series(today_local())]
        return render_template("admin/dashboard.html", series=series, active_page="admin_dashboard")

    @app.route("/api/dashboard/stats", endpoint="api_dashboard_stats")
    @access_required(guard, is_admin_or_staff, api=True)
    def api_dashboard_stats():
        series = stats.sunday_series(today_local())
        return jsonify({"success": True, "data": [point.to_dict() for point in series]})
