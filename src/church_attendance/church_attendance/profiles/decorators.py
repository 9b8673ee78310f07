from __future__ import annotations

from functools import wraps
from typing import Callable, Optional

from flask import flash, g, jsonify, redirect, render_template, request, session, url_for

from ..core.exceptions import AuthenticationError
from .guard import AccessPredicate, ProfileGuard, any_profile


def render_forbidden(message: str, detail: Optional[str] = None):
    current_user = {"full_name": session.get("name"), "role": session.get("role")}
    return render_template("403.html", current_user=current_user, message=message, detail=detail), 403


def access_required(
    guard: ProfileGuard,
    predicate: AccessPredicate | Callable[..., AccessPredicate] = any_profile,
    *,
    denied_message: str = "접근 권한이 없습니다.",
    from_view_args: bool = False,
    api: bool = False,
):
    """Protect a view with the profile guard.

    from_view_args: predicate is a factory called with the view's kwargs
    (e.g. manages_department(department=...)).
    api: answer with JSON instead of redirect / 403 page.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            check = predicate(**kwargs) if from_view_args else predicate
            try:
                decision = guard.evaluate(session.get("account_id"), check)
            except AuthenticationError as e:
                if api:
                    return jsonify({"success": False, "error": str(e)}), 401
                flash("로그인 후 이용해 주세요.", "warning")
                return redirect(url_for("login", next=request.path))

            if not decision.granted:
                if api:
                    return jsonify({"success": False, "error": decision.reason or denied_message}), 403
                return render_forbidden(denied_message, decision.reason)

            g.profile = decision.profile
            return view(*args, **kwargs)

        return wrapper

    return decorator
