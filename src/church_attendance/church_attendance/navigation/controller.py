from __future__ import annotations

from flask import Flask, session

from ..container import Container
from ..core.enums import Role
from .menu import build_menu


def register(app: Flask, container: Container) -> None:
    app.jinja_env.globals["csrf_token"] = lambda: ""

    @app.context_processor
    def inject_navigation():
        role_s = session.get("role")
        try:
            role = Role(role_s) if role_s else None
        except ValueError:
            role = None
        return {
            "menu_items": build_menu(role),
            "current_user": {"full_name": session.get("name"), "role": role_s},
        }
