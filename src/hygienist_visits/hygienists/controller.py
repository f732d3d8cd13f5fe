from __future__ import annotations

from flask import Flask, request

from ..common.http import admin_required, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.hygienist_service

    @app.route("/api/hygienists", methods=["GET"], endpoint="list_hygienists")
    @login_required
    def list_hygienists(user):
        q = (request.args.get("q") or "").strip() or None
        return ok([h.to_dict() for h in service.list(q=q)])

    @app.route("/api/hygienists/<int:hygienist_id>", methods=["GET"], endpoint="get_hygienist")
    @login_required
    def get_hygienist(hygienist_id: int, user):
        return ok(service.get(hygienist_id).to_dict())

    @app.route("/api/hygienists", methods=["POST"], endpoint="create_hygienist")
    @admin_required
    def create_hygienist(user):
        return ok(service.create(json_body()).to_dict(), 201)

    @app.route("/api/hygienists/<int:hygienist_id>", methods=["PUT"], endpoint="update_hygienist")
    @admin_required
    def update_hygienist(hygienist_id: int, user):
        return ok(service.update(hygienist_id, json_body()).to_dict())

    @app.route("/api/hygienists/<int:hygienist_id>", methods=["DELETE"], endpoint="delete_hygienist")
    @admin_required
    def delete_hygienist(hygienist_id: int, user):
        service.delete(hygienist_id)
        return ok({"id": hygienist_id, "deleted": True})
