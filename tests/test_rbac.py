"""Unit tests for app.services.rbac: role resolution and authorization decisions."""

import unittest

from app.core.errors import CallableError, ErrorKind
from app.schemas.auth import CallerIdentity
from app.services.rbac import (
    DENIAL_MESSAGES,
    Action,
    Role,
    authorize,
    parse_role,
    resolve_role,
    validate_role,
)
from tests.support import DatabaseTestCase

ADMIN_ONLY_ACTIONS = [a for a in Action if a is not Action.DELETE_USER]


class TestParseAndValidateRole(unittest.TestCase):
    def test_allowed_roles(self) -> None:
        self.assertIs(parse_role("member"), Role.MEMBER)
        self.assertIs(parse_role("executive"), Role.EXECUTIVE)
        self.assertIs(parse_role("admin"), Role.ADMIN)

    def test_rejects_other_values(self) -> None:
        for value in ("Admin", "superuser", "", None, 1, "admin "):
            with self.subTest(value=value):
                self.assertIsNone(parse_role(value))

    def test_validate_role_raises_invalid_argument(self) -> None:
        with self.assertRaises(CallableError) as ctx:
            validate_role("owner")
        self.assertIs(ctx.exception.kind, ErrorKind.INVALID_ARGUMENT)
        self.assertEqual(ctx.exception.message, "Role must be one of: member, executive, admin")


class TestResolveRole(DatabaseTestCase):
    """Role comes from the Role Store; a missing record means member."""

    def test_missing_record_defaults_to_member(self) -> None:
        self.assertIs(resolve_role(self.db, "nobody"), Role.MEMBER)

    def test_reads_stored_role(self) -> None:
        self.add_user("A1", role="admin")
        self.add_user("E1", role="executive")
        self.assertIs(resolve_role(self.db, "A1"), Role.ADMIN)
        self.assertIs(resolve_role(self.db, "E1"), Role.EXECUTIVE)

    def test_ignores_identity_claims(self) -> None:
        """A stale admin claim on the identity does not grant admin."""
        self.add_user("U1", role="member")
        from app.models import Identity

        identity = self.db.get(Identity, "U1")
        identity.custom_claims = {"role": "admin"}
        self.db.commit()
        self.assertIs(resolve_role(self.db, "U1"), Role.MEMBER)

    def test_re_fetched_per_call(self) -> None:
        self.add_user("U1", role="member")
        self.assertIs(resolve_role(self.db, "U1"), Role.MEMBER)
        from app.models import UserRecord

        self.db.get(UserRecord, "U1").role = "admin"
        self.db.commit()
        self.assertIs(resolve_role(self.db, "U1"), Role.ADMIN)


class TestAuthorize(DatabaseTestCase):
    def test_unauthenticated_rejected_for_every_action(self) -> None:
        for action in Action:
            with self.subTest(action=action):
                with self.assertRaises(CallableError) as ctx:
                    authorize(self.db, None, action, target_uid="X")
                self.assertIs(ctx.exception.kind, ErrorKind.UNAUTHENTICATED)

    def test_non_admin_denied_admin_actions(self) -> None:
        for role in ("member", "executive"):
            caller = self.add_user(f"{role}-1", role=role)
            for action in ADMIN_ONLY_ACTIONS:
                with self.subTest(role=role, action=action):
                    with self.assertRaises(CallableError) as ctx:
                        authorize(self.db, caller, action)
                    self.assertIs(ctx.exception.kind, ErrorKind.PERMISSION_DENIED)
                    self.assertEqual(ctx.exception.message, DENIAL_MESSAGES[action])

    def test_caller_without_record_is_member(self) -> None:
        caller = self.add_user("U9", with_record=False)
        with self.assertRaises(CallableError) as ctx:
            authorize(self.db, caller, Action.LIST_USERS)
        self.assertIs(ctx.exception.kind, ErrorKind.PERMISSION_DENIED)

    def test_admin_permitted(self) -> None:
        admin = self.add_user("A1", role="admin")
        for action in Action:
            with self.subTest(action=action):
                self.assertIs(authorize(self.db, admin, action, target_uid="U1"), Role.ADMIN)

    def test_self_delete_always_permitted(self) -> None:
        for role in ("member", "executive", "admin"):
            caller = self.add_user(f"self-{role}", role=role)
            with self.subTest(role=role):
                authorize(self.db, caller, Action.DELETE_USER, target_uid=caller.uid)

    def test_member_cannot_delete_other(self) -> None:
        caller = self.add_user("U2")
        with self.assertRaises(CallableError) as ctx:
            authorize(self.db, caller, Action.DELETE_USER, target_uid="U3")
        self.assertIs(ctx.exception.kind, ErrorKind.PERMISSION_DENIED)
        self.assertEqual(ctx.exception.message, "Only admins can delete other users.")

    def test_client_asserted_identity_has_no_role(self) -> None:
        """CallerIdentity carries no role, so nothing the client sends can elevate it."""
        self.assertNotIn("role", CallerIdentity.model_fields)
