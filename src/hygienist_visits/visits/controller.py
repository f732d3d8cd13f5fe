from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import json_body, login_required, ok, query_int, require_query
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.visit_service

    def _date_arg(name: str):
        raw = (request.args.get(name) or "").strip()
        if not raw:
            return None
        try:
            return parse_iso_date(raw)
        except ValueError:
            raise ValidationError(f"{name} must be a date (YYYY-MM-DD)", code="INVALID_PARAMETERS")

    @app.route("/api/visit-records", methods=["GET"], endpoint="list_visit_records")
    @login_required
    def list_visit_records(user):
        records = service.list(
            year=query_int("year"),
            month=query_int("month"),
            visit_date=_date_arg("date"),
            patient_id=query_int("patient_id"),
            hygienist_id=query_int("hygienist_id"),
            limit=DEFAULT_LIST_LIMIT,
        )
        return ok([r.to_dict() for r in records])

    @app.route("/api/visit-records/calendar", methods=["GET"], endpoint="visit_calendar")
    @login_required
    def visit_calendar(user):
        require_query("year", "month")
        days = service.calendar(query_int("year"), query_int("month"))
        return ok({day: [r.to_dict() for r in records] for day, records in days.items()})

    @app.route("/api/visit-records/stats/monthly", methods=["GET"], endpoint="visit_monthly_stats")
    @login_required
    def visit_monthly_stats(user):
        require_query("year", "month")
        return ok(service.monthly_overview(query_int("year"), query_int("month")).to_dict())

    @app.route("/api/visit-records/<int:record_id>", methods=["GET"], endpoint="get_visit_record")
    @login_required
    def get_visit_record(record_id: int, user):
        return ok(service.get(record_id).to_dict())

    @app.route("/api/visit-records", methods=["POST"], endpoint="create_visit_record")
    @login_required
    def create_visit_record(user):
        return ok(service.create(json_body()).to_dict(), 201)

    @app.route("/api/visit-records/<int:record_id>", methods=["PUT"], endpoint="update_visit_record")
    @login_required
    def update_visit_record(record_id: int, user):
        return ok(service.update(record_id, json_body()).to_dict())

    @app.route("/api/visit-records/<int:record_id>/status", methods=["PATCH"], endpoint="change_visit_status")
    @login_required
    def change_visit_status(record_id: int, user):
        body = json_body()
        record = service.change_status(record_id, body.get("status"), body.get("cancellation_reason"))
        return ok(record.to_dict())

    @app.route("/api/visit-records/<int:record_id>", methods=["DELETE"], endpoint="delete_visit_record")
    @login_required
    def delete_visit_record(record_id: int, user):
        service.delete(record_id)
        return ok({"id": record_id, "deleted": True})
