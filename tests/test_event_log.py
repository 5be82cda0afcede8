"""Unit tests for app.services.event_log: best-effort writes that never raise."""

import unittest
from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from app.core.database import SessionLocal
from app.services.event_log import EventType, SystemEventLog, get_event_log, list_system_events
from tests.support import DatabaseTestCase


class TestRecord(DatabaseTestCase):
    def test_writes_entry(self) -> None:
        ok = self.events.record(
            EventType.LOGIN,
            user_id="U1",
            email="u1@example.org",
            description="Logged in",
            details={"ip": "10.0.0.1"},
        )
        self.assertTrue(ok)
        entries = self.system_events()
        self.assertEqual(len(entries), 1)
        self.assertEqual(entries[0].type, "login")
        self.assertEqual(entries[0].details, {"ip": "10.0.0.1"})
        self.assertIsNotNone(entries[0].created_at)

    def test_list_filters_by_type(self) -> None:
        self.events.record(EventType.LOGIN, user_id="U1")
        self.events.record(EventType.LOGOUT, user_id="U1")
        self.events.record(EventType.LOGIN, user_id="U2")
        logins = list_system_events(self.db, event_type="login")
        self.assertEqual([e.user_id for e in logins], ["U2", "U1"])
        self.assertEqual(len(list_system_events(self.db)), 3)


class TestGetEventLog(unittest.TestCase):
    def test_uses_application_session_factory(self) -> None:
        log = get_event_log()
        self.assertIsInstance(log, SystemEventLog)
        self.assertIs(log._session_factory, SessionLocal)


class TestRecordFailure(unittest.TestCase):
    def test_session_factory_failure_returns_false(self) -> None:
        def broken_factory():
            raise OperationalError("connect", {}, Exception("connection refused"))

        log = SystemEventLog(broken_factory)
        with self.assertLogs("app.services.event_log", level="WARNING") as logs:
            self.assertFalse(log.record(EventType.ROLE_CHANGE, user_id="A1"))
        self.assertIn("role_change", logs.output[0])

    def test_commit_failure_rolls_back_and_closes(self) -> None:
        session = MagicMock()
        session.commit.side_effect = OperationalError("INSERT", {}, Exception("read-only"))
        log = SystemEventLog(lambda: session)
        with self.assertLogs("app.services.event_log", level="WARNING"):
            self.assertFalse(log.record(EventType.SIGNUP, user_id="U1"))
        session.rollback.assert_called_once()
        session.close.assert_called_once()
