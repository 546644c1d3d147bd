import psycopg2

from app.config import Settings
from ensure_db import ensure_database, target_database


class FakeCursor:
    def __init__(self, exists: bool, fail_create: bool = False):
        self.exists = exists
        self.fail_create = fail_create
        self.executed = []
        self.closed = False

    def execute(self, query, params=None):
        self.executed.append((query, params))
        if self.fail_create and len(self.executed) > 1:
            raise psycopg2.Error("permission denied")

    def fetchone(self):
        return (1,) if self.exists else None

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, cursor: FakeCursor):
        self._cursor = cursor
        self.isolation_level = None
        self.closed = False

    def set_isolation_level(self, level):
        self.isolation_level = level

    def cursor(self):
        return self._cursor

    def close(self):
        self.closed = True


def _connector(cursor, calls):
    def connect(**kwargs):
        calls.append(kwargs)
        return FakeConnection(cursor)

    return connect


def test_target_database_from_url():
    cfg = Settings(database_url="postgresql://bob:pw@db.internal:6543/parcels")
    name, params = target_database(cfg)
    assert name == "parcels"
    assert params == {"host": "db.internal", "port": 6543, "user": "bob", "password": "pw"}


def test_target_database_from_parts():
    cfg = Settings(database_url=None, db_host="pg", db_name="courier_track")
    name, params = target_database(cfg)
    assert name == "courier_track"
    assert params["host"] == "pg"


def test_existing_database_is_left_alone():
    cursor, calls = FakeCursor(exists=True), []
    cfg = Settings(database_url="postgresql://u:p@h:5432/parcels")

    assert ensure_database(cfg, connect=_connector(cursor, calls)) == 0
    assert calls[0]["database"] == "postgres"
    assert len(cursor.executed) == 1
    assert cursor.closed


def test_missing_database_is_created():
    cursor, calls = FakeCursor(exists=False), []
    cfg = Settings(database_url="postgresql://u:p@h:5432/parcels")

    assert ensure_database(cfg, connect=_connector(cursor, calls)) == 0
    assert len(cursor.executed) == 2
    assert cursor.executed[0][1] == ("parcels",)


def test_create_failure_exits_nonzero():
    cursor = FakeCursor(exists=False, fail_create=True)
    cfg = Settings(database_url="postgresql://u:p@h:5432/parcels")

    assert ensure_database(cfg, connect=_connector(cursor, [])) == 1
    assert cursor.closed


def test_unreachable_server_is_not_fatal():
    def connect(**kwargs):
        raise psycopg2.OperationalError("connection refused")

    cfg = Settings(database_url="postgresql://u:p@h:5432/parcels")
    assert ensure_database(cfg, connect=connect) == 0
