from __future__ import annotations

from urllib.parse import quote

from flask import Flask

from ..common.http import login_required, ok, query_int, require_query
from ..container import Container
from .csv_export import ExportFile, export_hygienist_report, export_patient_report


def register(app: Flask, container: Container) -> None:
    reports = container.report_service

    def _period():
        require_query("year", "month")
        return query_int("year"), query_int("month")

    def _year():
        require_query("year")
        return query_int("year")

    def _send_csv(export: ExportFile):
        return app.response_class(
            export.content,
            mimetype=export.mimetype,
            headers={"Content-Disposition": f"attachment; filename=\"{quote(export.filename)}\""},
        )

    # ---- patient reports ----

    @app.route("/api/patient-reports/<int:patient_id>/monthly", methods=["GET"], endpoint="patient_monthly_report")
    @login_required
    def patient_monthly_report(patient_id: int, user):
        year, month = _period()
        return ok(reports.patient_monthly_stats(patient_id, year, month).to_dict())

    @app.route("/api/patient-reports/<int:patient_id>/yearly", methods=["GET"], endpoint="patient_yearly_report")
    @login_required
    def patient_yearly_report(patient_id: int, user):
        return ok([s.to_dict() for s in reports.patient_yearly_stats(patient_id, _year())])

    @app.route("/api/patient-reports/comparison", methods=["GET"], endpoint="patient_comparison_report")
    @login_required
    def patient_comparison_report(user):
        year, month = _period()
        return ok(reports.patient_comparison(year, month).to_dict())

    @app.route("/api/patient-reports/<int:patient_id>/csv", methods=["GET"], endpoint="patient_report_csv")
    @login_required
    def patient_report_csv(patient_id: int, user):
        year, month = _period()
        return _send_csv(export_patient_report(reports.patient_monthly_stats(patient_id, year, month)))

    # ---- hygienist reports ----

    @app.route(
        "/api/hygienist-reports/hygienist/<int:hygienist_id>/monthly",
        methods=["GET"],
        endpoint="hygienist_monthly_report",
    )
    @login_required
    def hygienist_monthly_report(hygienist_id: int, user):
        year, month = _period()
        return ok(reports.hygienist_monthly_stats(hygienist_id, year, month).to_dict())

    @app.route(
        "/api/hygienist-reports/hygienist/<int:hygienist_id>/yearly",
        methods=["GET"],
        endpoint="hygienist_yearly_report",
    )
    @login_required
    def hygienist_yearly_report(hygienist_id: int, user):
        return ok([s.to_dict() for s in reports.hygienist_yearly_stats(hygienist_id, _year())])

    @app.route(
        "/api/hygienist-reports/hygienist-comparison",
        methods=["GET"],
        endpoint="hygienist_comparison_report",
    )
    @login_required
    def hygienist_comparison_report(user):
        year, month = _period()
        return ok(reports.hygienist_comparison(year, month).to_dict())

    @app.route(
        "/api/hygienist-reports/hygienist/<int:hygienist_id>/csv",
        methods=["GET"],
        endpoint="hygienist_report_csv",
    )
    @login_required
    def hygienist_report_csv(hygienist_id: int, user):
        year, month = _period()
        return _send_csv(export_hygienist_report(reports.hygienist_monthly_stats(hygienist_id, year, month)))
