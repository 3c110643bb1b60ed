from __future__ import annotations

from flask import Flask, g

from ..common.http import build_guards, json_body, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    login_required, _ = build_guards(container.auth_service.identify)

    @app.route("/api/subscriptions", methods=["POST"], endpoint="subscriptions_create")
    @login_required
    def create_subscription():
        data = json_body()
        detail = container.subscription_service.create_subscription(
            user_id=g.identity.user_id,
            plan_id=data.get("planId"),
            start_date=data.get("startDate"),
        )
        return ok(detail.to_dict(), status=201, message="Subscription created successfully")

    @app.route("/api/subscriptions/my", methods=["GET"], endpoint="subscriptions_my")
    @login_required
    def my_subscriptions():
        items = container.subscription_service.my_subscriptions(g.identity.user_id)
        return ok([d.to_dict() for d in items])

    @app.route("/api/subscriptions/<int:subscription_id>/cancel", methods=["PATCH"], endpoint="subscriptions_cancel")
    @login_required
    def cancel_subscription(subscription_id: int):
        detail = container.subscription_service.cancel_subscription(
            subscription_id=subscription_id,
            user_id=g.identity.user_id,
        )
        return ok(detail.to_dict(), message="Subscription cancelled successfully")
