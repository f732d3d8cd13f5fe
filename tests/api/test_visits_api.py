from __future__ import annotations


def _create(client, **overrides):
    payload = {"patient_id": 3, "hygienist_id": 2, "visit_date": "2024-01-20", "start_time": "09:00", "end_time": "10:00"}
    payload.update(overrides)
    return client.post("/api/visit-records", json=payload)


def test_create_and_fetch_visit(user_client):
    resp = _create(user_client)
    assert resp.status_code == 201
    record = resp.get_json()["data"]
    assert record["status"] == "scheduled"

    fetched = user_client.get(f"/api/visit-records/{record['id']}").get_json()["data"]
    assert fetched["visit_date"] == "2024-01-20"


def test_list_by_month_and_day(user_client):
    _create(user_client)

    month = user_client.get("/api/visit-records?year=2024&month=1").get_json()["data"]
    day = user_client.get("/api/visit-records?date=2024-01-15").get_json()["data"]

    assert len(month) == 3
    assert len(day) == 2


def test_calendar_groups_days(user_client):
    _create(user_client)
    days = user_client.get("/api/visit-records/calendar?year=2024&month=1").get_json()["data"]
    assert sorted(days) == ["2024-01-15", "2024-01-20"]
    assert len(days["2024-01-15"]) == 2


def test_status_patch_requires_reason_for_cancel(user_client):
    rid = _create(user_client).get_json()["data"]["id"]

    bad = user_client.patch(f"/api/visit-records/{rid}/status", json={"status": "cancelled"})
    assert bad.status_code == 400

    ok = user_client.patch(
        f"/api/visit-records/{rid}/status",
        json={"status": "cancelled", "cancellation_reason": "patient in hospital"},
    )
    assert ok.get_json()["data"]["cancellation_reason"] == "patient in hospital"

    back = user_client.patch(f"/api/visit-records/{rid}/status", json={"status": "completed"})
    data = back.get_json()["data"]
    assert data["status"] == "completed"
    assert data["cancellation_reason"] is None


def test_monthly_overview_needs_period(user_client):
    resp = user_client.get("/api/visit-records/stats/monthly?year=2024")
    assert resp.status_code == 400
    assert resp.get_json()["error"]["code"] == "MISSING_PARAMETERS"

    data = user_client.get("/api/visit-records/stats/monthly?year=2024&month=1").get_json()["data"]
    assert data["total_visits"] == 2
    assert len(data["patient_stats"]) == 2


def test_bad_query_number_is_400(user_client):
    resp = user_client.get("/api/visit-records?year=abc")
    assert resp.status_code == 400
    assert resp.get_json()["error"]["code"] == "INVALID_PARAMETERS"


def test_delete_visit(user_client):
    rid = _create(user_client).get_json()["data"]["id"]
    assert user_client.delete(f"/api/visit-records/{rid}").status_code == 200
    assert user_client.get(f"/api/visit-records/{rid}").status_code == 404
