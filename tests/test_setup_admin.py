"""Unit tests for app.scripts.setup_admin."""

from app.scripts.setup_admin import SETUP_ACTOR, SETUP_ACTOR_EMAIL, SETUP_NOTE, setup_role
from app.services.identity import IdentityNotFoundError
from app.services.rbac import Role
from tests.support import DatabaseTestCase


class TestSetupRole(DatabaseTestCase):
    def test_grants_admin_with_audit_entry(self) -> None:
        self.add_user("U1", email="founder@example.org")
        uid = setup_role(self.db, "Founder@Example.org", Role.ADMIN)

        self.assertEqual(uid, "U1")
        self.assertEqual(self.stored_role("U1"), "admin")
        self.assertEqual(self.claims("U1"), {"role": "admin"})
        entry = self.audit_entries()[0]
        self.assertEqual(entry.changed_by, SETUP_ACTOR)
        self.assertEqual(entry.changed_by_email, SETUP_ACTOR_EMAIL)
        self.assertEqual(entry.note, SETUP_NOTE)
        self.assertEqual(entry.old_role, "member")

    def test_creates_missing_record(self) -> None:
        self.add_user("U2", email="new@example.org", with_record=False)
        setup_role(self.db, "new@example.org", Role.EXECUTIVE)
        self.assertEqual(self.stored_role("U2"), "executive")
        self.assertEqual(self.audit_entries()[0].old_role, "unknown")

    def test_unknown_email(self) -> None:
        with self.assertRaises(IdentityNotFoundError):
            setup_role(self.db, "nobody@example.org", Role.ADMIN)
