from __future__ import annotations

from flask import Flask, g

from ..common.http import build_guards, json_body, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    login_required, _ = build_guards(container.auth_service.identify)

    @app.route("/api/auth/register", methods=["POST"], endpoint="auth_register")
    def register_user():
        data = json_body()
        result = container.auth_service.register(
            name=data.get("name"),
            email=data.get("email"),
            password=data.get("password"),
            role=data.get("role") or "user",
            phone=data.get("phone"),
        )
        return ok(result.to_dict(), status=201, message="User registered successfully")

    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    def login():
        data = json_body()
        result = container.auth_service.login(data.get("email"), data.get("password"))
        return ok(result.to_dict(), message="Login successful")

    @app.route("/api/auth/me", methods=["GET"], endpoint="auth_me")
    @login_required
    def me():
        user = container.auth_service.get_profile(g.identity.user_id)
        return ok(user.to_public_dict())
