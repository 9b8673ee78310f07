from __future__ import annotations

import logging

from flask import Flask, flash, g, jsonify, redirect, render_template, request, session, url_for

from ..common.datetime_utils import coerce_date, current_sunday, today_local
from ..core.constants import DEFAULT_SERVICE_TYPE, SERVICE_TYPES
from ..core.exceptions import StoreError, ValidationError
from ..container import Container
from ..profiles.decorators import access_required
from ..profiles.guard import any_profile, manages_department

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    guard = container.guard
    service = container.attendance_service

    @app.route("/", endpoint="home")
    def home():
        account_id = session.get("account_id")
        if not account_id:
            return render_template("home.html", logged_in=False, departments=[], active_page="home")

        departments: list[str] = []
        try:
            account = container.credential_provider.get_account(account_id)
            if account is None:
                session.clear()
                return render_template("home.html", logged_in=False, departments=[], active_page="home")
            profile, _ = container.profile_service.ensure_profile(account_id, account.email)
            departments = list(profile.departments)
        except StoreError:
            logger.warning("home: profile unavailable for %s", account_id, exc_info=True)

        return render_template("home.html", logged_in=True, departments=departments, active_page="home")

    @app.route("/attendance", endpoint="attendance_index")
    @access_required(guard, any_profile)
    def attendance_index():
        departments = list(g.profile.departments)
        if len(departments) == 1:
            return redirect(url_for("attendance_department", department=departments[0]))
        return render_template("attendance/index.html", departments=departments, active_page="attendance")

    @app.route("/attendance/<department>", methods=["GET", "POST"], endpoint="attendance_department")
    @access_required(guard, manages_department, from_view_args=True, denied_message="이 부서에 대한 권한이 없습니다.")
    def attendance_department(department: str):
        source = request.form if request.method == "POST" else request.args
        service_type = source.get("service_type") or DEFAULT_SERVICE_TYPE
        raw_date = source.get("date")

        if request.method == "POST":
            member_ids = request.form.getlist("member_ids")
            if not member_ids:
                flash("출석할 교인을 선택해주세요.", "warning")
            else:
                # no fallback date on POST: the service rejects a missing or malformed one
                try:
                    key = service.save_attendance(
                        date=raw_date, service_type=service_type, department=department, member_ids=member_ids
                    )
                    flash("출석이 저장되었습니다.", "success")
                    return redirect(
                        url_for(
                            "attendance_department",
                            department=department,
                            date=key.date.isoformat(),
                            service_type=key.service_type,
                        )
                    )
                except (ValidationError, StoreError) as e:
                    flash(str(e), "danger")
                except Exception:
                    logger.exception("attendance save failed")
                    flash("저장 중 오류가 발생했습니다.", "danger")

        try:
            day = coerce_date(raw_date) if raw_date else current_sunday(today_local())
        except ValidationError as e:
            if request.method == "GET":
                flash(str(e), "danger")
            day = current_sunday(today_local())

        members = []
        selected: list[str] = []
        try:
            members = service.members_of(department)
            if request.method == "POST":
                selected = request.form.getlist("member_ids")
            elif service_type in SERVICE_TYPES:
                key = service.build_key(date_value=day, service_type=service_type, department=department)
                selected = service.selected_member_ids(key)
        except (ValidationError, StoreError) as e:
            flash(str(e), "danger")

        return render_template(
            "attendance/department.html",
            department=department,
            members=members,
            selected=set(selected),
            date=day.isoformat(),
            service_type=service_type,
            service_types=SERVICE_TYPES,
            active_page="attendance",
        )

    @app.route("/api/save-attendance", methods=["POST"], endpoint="api_save_attendance")
    @access_required(guard, any_profile, api=True)
    def api_save_attendance():
        data = request.get_json(silent=True) or {}
        department = data.get("department")
        if department and not manages_department(department)(g.profile):
            return jsonify({"success": False, "error": "이 부서에 대한 권한이 없습니다."}), 403

        try:
            service.save_attendance(
                date=data.get("date"),
                service_type=data.get("service_type"),
                department=department,
                member_ids=data.get("memberIds"),
            )
        except ValidationError as e:
            return jsonify({"success": False, "error": str(e)}), 400
        except StoreError as e:
            return jsonify({"success": False, "error": str(e) or "알 수 없는 오류"}), 500
        except Exception:
            logger.exception("save-attendance failed")
            return jsonify({"success": False, "error": "알 수 없는 오류"}), 500

        return jsonify({"success": True})
