import pytest

from src.hrms.hrms.container import assemble
from src.hrms.hrms.main import create_app


@pytest.fixture
def client(monkeypatch, users_repo, attendance_repo, leaves_repo, expenses_repo, fixed_now):
    monkeypatch.setenv("APP_ENV", "testing")
    container = assemble(
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        expenses_repo=expenses_repo,
        clock=lambda: fixed_now,
    )
    return create_app(container).test_client()


def login(client, user_id, role="employee"):
    with client.session_transaction() as sess:
        sess["user_id"] = user_id
        sess["role"] = role


def test_leave_flow(client):
    login(client, 3)
    res = client.post(
        "/api/leaves",
        json={"type": "sick", "start_date": "2026-02-05", "end_date": "2026-02-06", "reason": "flu"},
    )
    assert res.status_code == 201
    leave_id = res.get_json()["id"]
    assert res.get_json()["days"] == 2

    assert client.get("/api/leaves/pending").status_code == 403

    login(client, 2, "manager")
    pending = client.get("/api/leaves/pending").get_json()
    assert [lv["id"] for lv in pending] == [leave_id]

    res = client.put(f"/api/leaves/{leave_id}/status", json={"status": "approved"})
    assert res.status_code == 200
    assert res.get_json()["status"] == "approved"

    login(client, 3)
    assert client.get("/api/leaves/my").get_json()[0]["status"] == "approved"


def test_create_leave_with_bad_dates(client):
    login(client, 3)

    res = client.post("/api/leaves", json={"type": "sick", "start_date": "05/02/2026", "end_date": "2026-02-06"})

    assert res.status_code == 400


def test_leave_bodies_must_be_objects(client):
    login(client, 3)
    assert client.post("/api/leaves", json=["sick"]).status_code == 400

    login(client, 1, "admin")
    res = client.put("/api/leaves/1/status", json="approved")

    assert res.status_code == 400
    assert res.get_json()["message"] == "Request body must be a JSON object"
