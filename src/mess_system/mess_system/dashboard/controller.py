from __future__ import annotations

from flask import Flask, g

from ..common.http import build_guards, ok
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    login_required, role_required = build_guards(container.auth_service.identify)

    @app.route("/api/messes/<int:mess_id>/today-summary", methods=["GET"], endpoint="dashboard_today")
    @login_required
    @role_required(Role.MESS_OWNER)
    def today_summary(mess_id: int):
        summary = container.dashboard_service.today_summary(mess_id=mess_id, owner_id=g.identity.user_id)
        return ok(summary.to_dict())
