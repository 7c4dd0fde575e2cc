import pytest

from src.hrms.hrms.database import bootstrap, connection


class RecordingCursor:
    def __init__(self, statements):
        self.statements = statements

    def execute(self, sql):
        self.statements.append(sql)

    def fetchall(self):
        return [("users",), ("attendance_records",)]


class RecordingConnection:
    def __init__(self, statements):
        self.statements = statements

    def cursor(self):
        return RecordingCursor(self.statements)

    def commit(self):
        pass

    def close(self):
        pass


@pytest.fixture
def connects(monkeypatch):
    calls = []
    statements = []

    def fake_connect(**kwargs):
        calls.append(kwargs)
        return RecordingConnection(statements)

    monkeypatch.setattr(connection.mysql.connector, "connect", fake_connect)
    return calls, statements


DB = {"host": "db", "port": 3306, "user": "hr", "password": "pw", "database": "hrms_test"}


def test_apply_schema_creates_database_then_runs_statements(tmp_path, connects):
    calls, statements = connects
    schema = tmp_path / "schema.sql"
    schema.write_text(
        "-- header\nCREATE DATABASE IF NOT EXISTS hrms_db;\nUSE hrms_db;\n"
        "CREATE TABLE a (id INT);\n-- seed\nINSERT INTO a VALUES (1);\n"
        "INSERT INTO b VALUES ('x;y');\n",
        encoding="utf-8",
    )

    bootstrap.apply_schema(DB, schema_path=schema)

    assert "database" not in calls[0]
    assert calls[1]["database"] == "hrms_test"
    assert "`hrms_test`" in statements[0]
    assert statements[1:] == [
        "CREATE TABLE a (id INT)",
        "INSERT INTO a VALUES (1)",
        "INSERT INTO b VALUES ('x;y')",
    ]


def test_list_tables(connects):
    assert bootstrap.list_tables(DB) == ["users", "attendance_records"]
