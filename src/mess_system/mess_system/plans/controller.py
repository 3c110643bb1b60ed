from __future__ import annotations

from flask import Flask, g

from ..common.http import build_guards, json_body, ok
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    login_required, role_required = build_guards(container.auth_service.identify)

    @app.route("/api/messes/<int:mess_id>/plans", methods=["POST"], endpoint="plans_create")
    @login_required
    @role_required(Role.MESS_OWNER)
    def create_plan(mess_id: int):
        data = json_body()
        plan = container.plan_service.create_plan(
            mess_id=mess_id,
            owner_id=g.identity.user_id,
            name=data.get("name"),
            price=data.get("price"),
            duration_type=data.get("durationType"),
            meal_type=data.get("mealType"),
            meals_per_day=data.get("mealsPerDay"),
        )
        return ok(plan.to_dict(), status=201, message="Plan created successfully")

    @app.route("/api/messes/<int:mess_id>/plans", methods=["GET"], endpoint="plans_list")
    def list_plans(mess_id: int):
        return ok([p.to_dict() for p in container.plan_service.list_plans(mess_id)])
