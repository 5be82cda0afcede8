"""Unit tests for app.services.access_gate: shared invite token check."""

import unittest
from unittest.mock import MagicMock

from pydantic import SecretStr

from app.services.access_gate import (
    INVALID_ACCESS_TOKEN_MESSAGE,
    AccessTokenError,
    check_access_token,
    require_access_token,
)


class TestCheckAccessToken(unittest.TestCase):
    """check_access_token compares trimmed input against the expected value."""

    def test_exact_match(self) -> None:
        self.assertTrue(check_access_token("Invite2026", "Invite2026"))

    def test_surrounding_whitespace_is_ignored(self) -> None:
        self.assertTrue(check_access_token("  Invite2026\n", "Invite2026"))

    def test_mismatch(self) -> None:
        self.assertFalse(check_access_token("invite2026", "Invite2026"))

    def test_inner_whitespace_is_not_ignored(self) -> None:
        self.assertFalse(check_access_token("Invite 2026", "Invite2026"))

    def test_none_and_empty(self) -> None:
        self.assertFalse(check_access_token(None, "Invite2026"))
        self.assertFalse(check_access_token("", "Invite2026"))
        self.assertFalse(check_access_token("   ", "Invite2026"))

    def test_empty_expected_never_matches(self) -> None:
        self.assertFalse(check_access_token("", ""))


class TestRequireAccessToken(unittest.TestCase):
    """require_access_token raises AccessTokenError with the user-facing message."""

    def _settings(self, token: str) -> MagicMock:
        settings = MagicMock()
        settings.ACCESS_TOKEN = SecretStr(token)
        return settings

    def test_passes(self) -> None:
        require_access_token("Invite2026 ", self._settings("Invite2026"))

    def test_fails_with_message(self) -> None:
        with self.assertRaises(AccessTokenError) as ctx:
            require_access_token("wrong", self._settings("Invite2026"))
        self.assertEqual(ctx.exception.message, INVALID_ACCESS_TOKEN_MESSAGE)
        self.assertEqual(
            INVALID_ACCESS_TOKEN_MESSAGE,
            "Invalid access token. Please contact your administrator.",
        )
