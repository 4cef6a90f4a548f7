import pytest

from batch_attendance.container import wire_services
from batch_attendance.main import create_app
from batch_attendance.schedules.model import WeeklySchedule

from conftest import InMemoryAttendance, InMemoryMembers, InMemorySchedules, RecordingNotifier, make_member


@pytest.fixture
def container():
    members = InMemoryMembers([make_member(1), make_member(2), make_member(3, is_blocked=True)])
    return wire_services(
        members=members,
        attendance=InMemoryAttendance(),
        schedules=InMemorySchedules(),
        notifier=RecordingNotifier(),
        recompute_in_background=False,
    )


@pytest.fixture
def client(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    monkeypatch.delenv("CRON_SECRET", raising=False)
    app = create_app(container=container)
    app.config["TESTING"] = True
    return app.test_client()


def test_scan_checks_in_then_out_then_conflicts(client):
    first = client.post("/api/attendance/scan", json={"member_id": 1})
    second = client.post("/api/attendance/scan", json={"member_id": 1})
    third = client.post("/api/attendance/scan", json={"member_id": 1})

    assert first.status_code == 200
    assert first.get_json()["action"] == "CHECK_IN"
    assert first.get_json()["attendance"]["status"] == "IN"
    assert second.get_json()["action"] == "CHECK_OUT"
    assert second.get_json()["attendance"]["status"] == "OUT"
    assert third.status_code == 409
    assert third.get_json()["success"] is False


def test_check_in_is_idempotent(client):
    first = client.post("/api/attendance/checkin", json={"member_id": 2}).get_json()
    second = client.post("/api/attendance/checkin", json={"member_id": 2}).get_json()

    assert first["attendance"]["attendance_id"] == second["attendance"]["attendance_id"]


def test_blocked_member_gets_403(client):
    resp = client.post("/api/attendance/checkin", json={"member_id": 3})

    assert resp.status_code == 403


def test_unknown_member_gets_404(client):
    assert client.post("/api/attendance/scan", json={"member_id": 42}).status_code == 404


def test_missing_member_id_is_a_bad_request(client):
    assert client.post("/api/attendance/checkin", json={}).status_code == 400


def test_checkout_without_checkin_is_a_bad_request(client):
    resp = client.post("/api/attendance/checkout", json={"member_id": 1})

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "No check-in found for today"


def test_list_for_day(client, container):
    client.post("/api/attendance/checkin", json={"member_id": 1})
    today = container.ledger.day_for()

    body = client.get(f"/api/attendance?date={today}").get_json()

    assert body["date"] == today
    assert [r["member_id"] for r in body["attendance"]] == [1]


def test_list_rejects_bad_date(client):
    assert client.get("/api/attendance?date=06/01/2025").status_code == 400


def test_ranking_lists_every_member_by_rank(client):
    client.post("/api/attendance/scan", json={"member_id": 2})
    client.post("/api/attendance/scan", json={"member_id": 2})

    rows = client.get("/api/members/ranking").get_json()["ranking"]

    assert [r["rank"] for r in rows] == [1, 2, 3]
    assert {r["member_id"] for r in rows} == {1, 2, 3}
    assert next(r for r in rows if r["member_id"] == 3)["is_blocked"] is True


def test_cron_requires_bearer_secret(client):
    assert client.post("/api/cron/check-absence").status_code == 401
    assert client.post("/api/cron/check-absence", headers={"Authorization": "Bearer nope"}).status_code == 401


def test_cron_runs_sweep_for_given_date(client, container):
    resp = client.post(
        "/api/cron/check-absence?date=2025-01-06",
        headers={"Authorization": "Bearer test-cron-secret"},
    )

    body = resp.get_json()
    assert resp.status_code == 200
    assert body["date"] == "2025-01-06"
    assert body["results"]["checked"] == 3
    assert container.members_repo.get_by_id(1).absence_streak == 1
    assert container.members_repo.get_by_id(3).absence_streak == 0


def test_cron_rejects_bad_date(client):
    resp = client.get("/api/cron/check-absence?date=yesterday", headers={"Authorization": "Bearer test-cron-secret"})

    assert resp.status_code == 400


class _BrokenSchedules:
    def get_schedule_for_member(self, member_id):
        return WeeklySchedule.from_dict({"days": {"Monday": {"startTime": "09:00", "endTime": "11:00"}}})


def test_malformed_schedule_is_a_json_server_error(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    container = wire_services(
        members=InMemoryMembers([make_member(1)]),
        attendance=InMemoryAttendance(),
        schedules=_BrokenSchedules(),
        notifier=RecordingNotifier(),
        recompute_in_background=False,
    )
    client = create_app(container=container).test_client()

    resp = client.post("/api/attendance/checkin", json={"member_id": 1})

    assert resp.status_code == 500
    assert resp.get_json()["error"] == "Course schedule is misconfigured"
