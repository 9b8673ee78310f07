from __future__ import annotations

import hmac
import logging
from datetime import timedelta

from flask import Flask, flash, g, jsonify, redirect, render_template, request, session, url_for

from ..common.validators import split_departments
from ..core.constants import DEFAULT_SESSION_DAYS, POSITIONS
from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    PendingApprovalError,
    StoreError,
    ValidationError,
)
from ..container import Container
from .decorators import access_required
from .guard import any_profile, is_admin

logger = logging.getLogger(__name__)


def _safe_next(value: str | None) -> str | None:
    if value and value.startswith("/") and not value.startswith("//"):
        return value
    return None


def register(app: Flask, container: Container) -> None:
    guard = container.guard

    def _system_error(action: str, e: Exception) -> str:
        logger.exception("%s failed", action)
        if bool(app.config.get("DEBUG", False)):
            return f"{action} 중 시스템 오류가 발생했습니다: {e}"
        return f"{action} 중 시스템 오류가 발생했습니다."

    @app.route("/login", methods=["GET", "POST"], endpoint="login")
    def login():
        if "account_id" in session:
            return redirect(url_for("home"))

        retry_after = None
        username = ""
        if request.method == "POST":
            username = request.form.get("username", "")
            password = request.form.get("password", "")
            remember = request.form.get("remember_me")

            try:
                s_user = container.auth_service.login(username, password)

                session.clear()
                session.permanent = bool(remember)
                app.permanent_session_lifetime = timedelta(days=int(app.config.get("SESSION_DAYS", DEFAULT_SESSION_DAYS)))
                session["account_id"] = s_user.account_id
                session["name"] = s_user.full_name
                session["role"] = s_user.role.value

                return redirect(_safe_next(request.args.get("next")) or url_for("home"))
            except PendingApprovalError as e:
                session.clear()
                flash(str(e), "warning")
            except AuthenticationError as e:
                retry_after = e.retry_after
                flash(str(e), "danger")
            except ValidationError as e:
                flash(str(e), "danger")
            except Exception as e:
                flash(_system_error("로그인", e), "danger")

        return render_template("login.html", username=username, retry_after=retry_after)

    @app.route("/logout", endpoint="logout")
    def logout():
        session.clear()
        flash("로그아웃되었습니다.", "info")
        return redirect(url_for("home"))

    @app.route("/signup", methods=["GET", "POST"], endpoint="signup")
    def signup():
        form = {}
        if request.method == "POST":
            form = {k: request.form.get(k, "") for k in ("name", "username", "email")}
            try:
                container.auth_service.sign_up(
                    full_name=form["name"],
                    username=form["username"],
                    email=form["email"],
                    password=request.form.get("password", ""),
                    confirm_password=request.form.get("confirm_password", ""),
                )
                flash("회원가입이 완료되었습니다! 관리자 승인 후 로그인할 수 있습니다.", "success")
                return redirect(url_for("login"))
            except ValidationError as e:
                flash(str(e), "danger")
            except Exception as e:
                flash(_system_error("회원가입", e), "danger")

        return render_template("signup.html", form=form)

    @app.route("/mypage", endpoint="mypage")
    @access_required(guard, any_profile)
    def mypage():
        profile = g.profile
        account = container.credential_provider.get_account(profile.profile_id)
        return render_template(
            "mypage.html",
            profile=profile,
            email=profile.email or (account.email if account else None) or "-",
            active_page="mypage",
        )

    @app.route("/admin/users", endpoint="admin_users")
    @access_required(guard, is_admin, denied_message="관리자 권한이 필요합니다.")
    def admin_users():
        try:
            profiles = container.profile_service.list_profiles(current_role=g.profile.role)
        except StoreError as e:
            flash(str(e), "danger")
            profiles = []
        return render_template(
            "admin/users.html",
            profiles=profiles,
            positions=POSITIONS,
            roles=[r.value for r in Role],
            active_page="admin_users",
        )

    @app.route("/admin/users/<profile_id>/update", methods=["POST"], endpoint="admin_update_user")
    @access_required(guard, is_admin, denied_message="관리자 권한이 필요합니다.")
    def admin_update_user(profile_id: str):
        try:
            container.profile_service.update_profile(
                current_role=g.profile.role,
                profile_id=profile_id,
                full_name=request.form.get("full_name", ""),
                email=request.form.get("email", ""),
                position=request.form.get("position", ""),
                role=request.form.get("role", ""),
                departments=split_departments(request.form.get("departments", "")),
            )
            flash("저장되었습니다.", "success")
        except (ValidationError, AuthorizationError, StoreError) as e:
            flash(f"업데이트 실패: {e}", "danger")
        except Exception as e:
            flash(_system_error("업데이트", e), "danger")
        return redirect(url_for("admin_users"))

    @app.route("/admin/users/<profile_id>/approval", methods=["POST"], endpoint="admin_set_approval")
    @access_required(guard, is_admin, denied_message="관리자 권한이 필요합니다.")
    def admin_set_approval(profile_id: str):
        approve = request.form.get("approve") == "1"
        try:
            container.profile_service.set_approval(current_role=g.profile.role, profile_id=profile_id, approve=approve)
            flash("승인되었습니다." if approve else "승인이 취소되었습니다.", "success")
        except (ValidationError, AuthorizationError, StoreError) as e:
            flash(f"승인 처리 실패: {e}", "danger")
        except Exception as e:
            flash(_system_error("승인 처리", e), "danger")
        return redirect(url_for("admin_users"))

    @app.route("/admin/users/<profile_id>/delete", methods=["POST"], endpoint="admin_delete_user")
    @access_required(guard, is_admin, denied_message="관리자 권한이 필요합니다.")
    def admin_delete_user(profile_id: str):
        try:
            container.profile_service.delete_profile(
                current_role=g.profile.role,
                current_profile_id=g.profile.profile_id,
                profile_id=profile_id,
            )
            flash("삭제되었습니다.", "success")
        except (ValidationError, AuthorizationError, StoreError) as e:
            flash(f"삭제 실패: {e}", "danger")
        except Exception as e:
            flash(_system_error("삭제", e), "danger")
        return redirect(url_for("admin_users"))

    @app.route("/api/profile/ensure", methods=["POST"], endpoint="api_profile_ensure")
    def api_profile_ensure():
        data = request.get_json(silent=True) or {}
        user_id = data.get("userId")
        if not user_id:
            return jsonify({"message": "userId가 없습니다."}), 400
        if session.get("account_id") != user_id:
            return jsonify({"message": "본인 프로필만 확인할 수 있습니다."}), 403

        try:
            profile, created = container.profile_service.ensure_profile(user_id, data.get("email"))
        except StoreError:
            logger.exception("ensure profile failed for %s", user_id)
            return jsonify({"message": "프로필 생성에 실패했습니다."}), 500
        return jsonify({"profile": profile.to_dict()}), 201 if created else 200

    @app.route("/api/create-profile", methods=["POST"], endpoint="api_create_profile")
    def api_create_profile():
        expected_key = app.config.get("SERVICE_ROLE_KEY")
        if not expected_key:
            logger.error("SERVICE_ROLE_KEY is not configured")
            return jsonify({"success": False, "error": "서버 설정 오류: SERVICE_ROLE_KEY 환경 변수가 설정되지 않았습니다."}), 500
        if not hmac.compare_digest(request.headers.get("X-Service-Role-Key", ""), str(expected_key)):
            return jsonify({"success": False, "error": "권한이 없습니다."}), 403

        data = request.get_json(silent=True) or {}
        if not data.get("user_id"):
            return jsonify({"success": False, "error": "user_id가 필요합니다."}), 400

        try:
            profile = container.profile_service.create_or_upgrade_profile(
                account_id=str(data["user_id"]),
                full_name=data.get("full_name") or data.get("name"),
                username=(data.get("username") or "").strip().lower() or None,
                email=data.get("email"),
                role=data.get("role"),
            )
        except ValidationError as e:
            return jsonify({"success": False, "error": str(e)}), 400
        except StoreError as e:
            logger.error("create-profile failed: %s", e)
            return jsonify({"success": False, "error": str(e)}), 500
        return jsonify({"success": True, "data": profile.to_dict()})
