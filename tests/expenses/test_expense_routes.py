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


def test_expense_flow(client):
    login(client, 3)
    res = client.post("/api/expenses", json={"title": "Hotel", "amount": 240, "category": "travel"})
    assert res.status_code == 201
    claim = res.get_json()
    assert claim["amount"] == "240.00"
    assert claim["status"] == "submitted"

    assert client.get("/api/expenses/pending").status_code == 403
    assert client.put(f"/api/expenses/{claim['id']}/status", json={"status": "approved"}).status_code == 403

    login(client, 2, "manager")
    assert [c["id"] for c in client.get("/api/expenses/pending").get_json()] == [claim["id"]]
    res = client.put(f"/api/expenses/{claim['id']}/status", json={"status": "approved", "notes": "fine"})
    assert res.status_code == 200
    assert res.get_json()["approval_date"] is not None

    login(client, 3)
    assert client.get("/api/expenses/my").get_json()[0]["status"] == "approved"


def test_create_expense_validation(client):
    login(client, 3)

    assert client.post("/api/expenses", json={"title": "Hotel", "amount": "-1", "category": "travel"}).status_code == 400
    assert client.post("/api/expenses", json=["Hotel", 240]).status_code == 400


def test_decide_expense_with_non_object_body(client):
    login(client, 3)
    claim_id = client.post("/api/expenses", json={"title": "Meal", "amount": "12", "category": "food"}).get_json()["id"]

    login(client, 1, "admin")
    res = client.put(f"/api/expenses/{claim_id}/status", json="approved")

    assert res.status_code == 400
    assert res.get_json()["message"] == "Request body must be a JSON object"
