from __future__ import annotations

from flask import Flask, g, request

from ..common.http import build_guards, json_body, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    login_required, _ = build_guards(container.auth_service.identify)

    @app.route("/api/subscriptions/<int:subscription_id>/attendance", methods=["POST"], endpoint="attendance_mark")
    @login_required
    def mark_attendance(subscription_id: int):
        data = json_body()
        record = container.attendance_service.mark_attendance(
            subscription_id=subscription_id,
            user_id=g.identity.user_id,
            day=data.get("date"),
            breakfast=data.get("breakfast"),
            lunch=data.get("lunch"),
            dinner=data.get("dinner"),
        )
        return ok(record.to_dict(), message="Attendance marked successfully")

    @app.route("/api/subscriptions/<int:subscription_id>/attendance", methods=["GET"], endpoint="attendance_list")
    @login_required
    def get_attendance(subscription_id: int):
        history = container.attendance_service.get_attendance(
            subscription_id=subscription_id,
            user_id=g.identity.user_id,
            start_date=request.args.get("startDate"),
            end_date=request.args.get("endDate"),
        )
        return ok([r.to_dict() for r in history.records], stats=history.stats.to_dict())
