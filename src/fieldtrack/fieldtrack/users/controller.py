from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.web import form_data, handle_errors, login_required
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..container import Container
from .service import SessionUser


def _parse_role(value: str, *, field_name: str) -> Role:
    try:
        return Role((value or "").strip().lower())
    except ValueError:
        raise ValidationError(f"{field_name} must be 'worker' or 'admin'")


def _start_session(user: SessionUser, *, remember: bool) -> dict:
    session.clear()
    session.permanent = bool(remember)

    session["user_id"] = user.user_id
    session["name"] = user.name
    session["role"] = user.role.value
    return {"user_id": user.user_id, "name": user.name, "role": user.role.value}


def register(app: Flask, container: Container) -> None:
    @app.route("/auth/login", methods=["POST"], endpoint="login")
    @handle_errors
    def login():
        data = form_data()
        portal = _parse_role(data.get("portal", ""), field_name="Portal")

        s_user = container.auth_service.authenticate(
            data.get("identifier", ""),
            data.get("password", ""),
            portal,
        )
        user = _start_session(s_user, remember=bool(data.get("remember_me")))
        return jsonify({"message": "Signed in", "user": user})

    @app.route("/auth/register", methods=["POST"], endpoint="register")
    @handle_errors
    def register_account():
        data = form_data()
        role = _parse_role(data.get("role") or Role.WORKER.value, field_name="Role")

        s_user = container.registration_service.register(
            name=data.get("name", ""),
            email=data.get("email", ""),
            mobile=data.get("mobile", ""),
            password=data.get("password", ""),
            confirm_password=data.get("confirm_password", ""),
            role=role,
        )
        user = _start_session(s_user, remember=False)
        return jsonify({"message": "Account created", "user": user}), 201

    @app.route("/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"message": "Signed out"})

    @app.route("/auth/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return jsonify(
            {"user": {"user_id": session["user_id"], "name": session.get("name"), "role": session.get("role")}}
        )
