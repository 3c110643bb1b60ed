from __future__ import annotations

from flask import Flask, g

from ..common.http import build_guards, json_body, ok
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    login_required, role_required = build_guards(container.auth_service.identify)

    @app.route("/api/messes", methods=["POST"], endpoint="messes_create")
    @login_required
    @role_required(Role.MESS_OWNER)
    def create_mess():
        data = json_body()
        mess = container.mess_service.create_mess(
            owner_id=g.identity.user_id,
            name=data.get("name"),
            location=data.get("location"),
            description=data.get("description"),
            veg_available=data.get("vegAvailable"),
            nonveg_available=data.get("nonvegAvailable"),
        )
        return ok(mess.to_dict(), status=201, message="Mess created successfully")

    @app.route("/api/messes", methods=["GET"], endpoint="messes_list")
    def list_messes():
        return ok([m.to_dict() for m in container.mess_service.list_messes()])

    @app.route("/api/messes/my", methods=["GET"], endpoint="messes_my")
    @login_required
    @role_required(Role.MESS_OWNER)
    def my_messes():
        return ok([m.to_dict() for m in container.mess_service.my_messes(g.identity.user_id)])

    @app.route("/api/messes/<int:mess_id>", methods=["GET"], endpoint="messes_get")
    def get_mess(mess_id: int):
        return ok(container.mess_service.get_mess(mess_id).to_dict())

    @app.route("/api/messes/<int:mess_id>", methods=["PUT"], endpoint="messes_update")
    @login_required
    @role_required(Role.MESS_OWNER)
    def update_mess(mess_id: int):
        mess = container.mess_service.update_mess(mess_id=mess_id, owner_id=g.identity.user_id, data=json_body())
        return ok(mess.to_dict(), message="Mess updated successfully")
