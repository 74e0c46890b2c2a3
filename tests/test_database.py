"""
SQL notification store against in-memory sqlite.
"""

from datetime import datetime, timedelta, timezone

import pytest

from config.database import SqlNotificationStore
from config.models import StatusNotification
from monitoring.monitor import MonitorState
from monitoring.status import Status, NotificationRecord
from monitoring.store import InMemoryNotificationStore, create_store

T0 = datetime(2026, 5, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def sql_store():
    store = SqlNotificationStore("sqlite://")
    store.init_database()
    return store


def test_get_missing_returns_none(sql_store):
    assert sql_store.get(Status.UP) is None
    assert sql_store.latest() is None


def test_put_then_get(sql_store):
    sql_store.put(Status.UP, NotificationRecord(Status.UP, "m1", T0))

    record = sql_store.get(Status.UP)

    assert record == NotificationRecord(Status.UP, "m1", T0)
    assert sql_store.get(Status.DOWN) is None


def test_put_replaces_previous_record(sql_store):
    sql_store.put(Status.DOWN, NotificationRecord(Status.DOWN, "m1", T0))
    sql_store.put(Status.DOWN, NotificationRecord(Status.DOWN, "m2", T0 + timedelta(minutes=5)))

    session = sql_store.get_db_session()
    try:
        rows = session.query(StatusNotification).all()
    finally:
        session.close()

    assert [(row.status, row.message_id) for row in rows] == [("down", "m2")]


def test_latest_and_discard(sql_store):
    sql_store.put(Status.UP, NotificationRecord(Status.UP, "m1", T0))
    sql_store.put(Status.DOWN, NotificationRecord(Status.DOWN, "m2", T0 + timedelta(minutes=1)))

    assert sql_store.latest().message_id == "m2"

    sql_store.discard(Status.DOWN)

    assert sql_store.get(Status.DOWN) is None
    assert sql_store.latest().message_id == "m1"


def test_restart_restores_last_status(sql_store):
    sql_store.put(Status.DOWN, NotificationRecord(Status.DOWN, "m9", T0))

    state = MonitorState.restore(sql_store)

    assert state.last_status is Status.DOWN


def test_read_errors_are_swallowed():
    store = SqlNotificationStore("sqlite://")

    # table never created
    assert store.get(Status.UP) is None
    assert store.latest() is None
    store.put(Status.UP, NotificationRecord(Status.UP, "m1", T0))
    store.discard(Status.UP)


def test_create_store_selects_backend(tmp_path):
    assert isinstance(create_store(None), InMemoryNotificationStore)

    store = create_store(f"sqlite:///{tmp_path / 'state.db'}")
    assert isinstance(store, SqlNotificationStore)
    store.put(Status.UP, NotificationRecord(Status.UP, "m1", T0))
    assert create_store(f"sqlite:///{tmp_path / 'state.db'}").get(Status.UP).message_id == "m1"
