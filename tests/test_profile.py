"""Unit tests for app.services.profile and its request schema."""

import unittest

from pydantic import ValidationError

from app.schemas.profile import ProfileUpdateRequest
from app.services.profile import (
    ProfileNotFoundError,
    deactivate_own_profile,
    get_own_profile,
    update_own_profile,
)
from tests.support import DatabaseTestCase


class TestProfileUpdateRequest(unittest.TestCase):
    def test_rejects_authorization_fields(self) -> None:
        for field, value in (("role", "admin"), ("email", "x@example.org"), ("is_active", True)):
            with self.subTest(field=field):
                with self.assertRaises(ValidationError):
                    ProfileUpdateRequest(**{field: value})

    def test_rejects_unknown_department(self) -> None:
        with self.assertRaises(ValidationError):
            ProfileUpdateRequest(department="Finance")

    def test_accepts_known_or_empty_department(self) -> None:
        self.assertEqual(ProfileUpdateRequest(department="Recreation & Sports").department, "Recreation & Sports")
        self.assertEqual(ProfileUpdateRequest(department="").department, "")


class TestUpdateOwnProfile(DatabaseTestCase):
    def test_updates_fields_and_keeps_role(self) -> None:
        caller = self.add_user("U1", role="executive", first_name="Old", last_name="Name")
        record = update_own_profile(
            self.db,
            self.events,
            caller,
            ProfileUpdateRequest(first_name="Jo", bio="Treasurer", phone="555-0101"),
        )
        self.assertEqual(record.first_name, "Jo")
        self.assertEqual(record.last_name, "Name")
        self.assertEqual(record.display_name, "Jo Name")
        self.assertEqual(record.bio, "Treasurer")
        self.assertTrue(record.profile_complete)
        self.assertEqual(record.role, "executive")

        events = self.system_events("profile_update")
        self.assertEqual(len(events), 1)
        self.assertEqual(events[0].details, {"fields": ["bio", "display_name", "first_name", "phone"]})

    def test_missing_record(self) -> None:
        caller = self.add_user("U2", with_record=False)
        with self.assertRaises(ProfileNotFoundError):
            get_own_profile(self.db, caller)
        with self.assertRaises(ProfileNotFoundError):
            update_own_profile(self.db, self.events, caller, ProfileUpdateRequest(bio="x"))


class TestDeactivateOwnProfile(DatabaseTestCase):
    def test_deactivates_without_deleting(self) -> None:
        caller = self.add_user("U1", role="executive")
        record = deactivate_own_profile(self.db, self.events, caller)
        self.assertFalse(record.is_active)
        self.assertIsNotNone(record.deactivated_at)
        self.assertEqual(self.stored_role("U1"), "executive")
        self.assertIsNotNone(self.claims("U1"))
        self.assertEqual(len(self.system_events("profile_deactivated")), 1)
