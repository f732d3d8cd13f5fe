from __future__ import annotations

from flask import Flask, request

from ..common.http import admin_required, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.patient_service

    @app.route("/api/patients", methods=["GET"], endpoint="list_patients")
    @login_required
    def list_patients(user):
        q = (request.args.get("q") or "").strip() or None
        return ok([p.to_dict() for p in service.list(q=q)])

    @app.route("/api/patients/<int:patient_id>", methods=["GET"], endpoint="get_patient")
    @login_required
    def get_patient(patient_id: int, user):
        return ok(service.get(patient_id).to_dict())

    @app.route("/api/patients", methods=["POST"], endpoint="create_patient")
    @admin_required
    def create_patient(user):
        patient = service.create(json_body())
        return ok(patient.to_dict(), 201)

    @app.route("/api/patients/<int:patient_id>", methods=["PUT"], endpoint="update_patient")
    @admin_required
    def update_patient(patient_id: int, user):
        return ok(service.update(patient_id, json_body()).to_dict())

    @app.route("/api/patients/<int:patient_id>", methods=["DELETE"], endpoint="delete_patient")
    @admin_required
    def delete_patient(patient_id: int, user):
        service.delete(patient_id)
        return ok({"id": patient_id, "deleted": True})
