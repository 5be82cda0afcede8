"""Identity provider: sign-in accounts, credentials and custom claims.

Each write commits on its own, so the identity provider behaves as a backend
independent of the Role Store even though both live in the same database.
"""

import logging
import uuid
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN, hash_password, verify_password
from app.models import Identity

logger = logging.getLogger(__name__)


class IdentityError(Exception):
    """Base error for identity provider operations."""

    code = "identity/error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class IdentityNotFoundError(IdentityError):
    code = "identity/user-not-found"


class EmailAlreadyExistsError(IdentityError):
    code = "identity/email-already-exists"


class WeakPasswordError(IdentityError):
    code = "identity/weak-password"


class InvalidEmailError(IdentityError):
    code = "identity/invalid-email"


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _new_uid() -> str:
    return uuid.uuid4().hex


class IdentityProvider:
    """SQL-backed identity provider bound to a session."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def find_user(self, uid: str) -> Identity | None:
        return self.db.get(Identity, uid)

    def find_user_by_email(self, email: str) -> Identity | None:
        return (
            self.db.query(Identity)
            .filter(Identity.email == normalize_email(email))
            .first()
        )

    def get_user(self, uid: str) -> Identity:
        """Return the identity for uid or raise IdentityNotFoundError."""
        identity = self.find_user(uid)
        if identity is None:
            raise IdentityNotFoundError(f"There is no user record corresponding to uid {uid}.")
        return identity

    def get_user_by_email(self, email: str) -> Identity:
        """Return the identity for email or raise IdentityNotFoundError."""
        identity = self.find_user_by_email(email)
        if identity is None:
            raise IdentityNotFoundError(f"There is no user record corresponding to email {email}.")
        return identity

    def create_user(self, email: str, password: str, display_name: str = "") -> Identity:
        """Create an account. Email must be unique; password 6-128 characters."""
        normalized = normalize_email(email)
        if "@" not in normalized or normalized.startswith("@") or normalized.endswith("@"):
            raise InvalidEmailError("The email address is improperly formatted.")
        if not (PASSWORD_MIN_LEN <= len(password) <= PASSWORD_MAX_LEN):
            raise WeakPasswordError(
                f"The password must be between {PASSWORD_MIN_LEN} and {PASSWORD_MAX_LEN} characters."
            )
        if self.find_user_by_email(normalized) is not None:
            raise EmailAlreadyExistsError("The email address is already in use by another account.")
        identity = Identity(
            uid=_new_uid(),
            email=normalized,
            password_hash=hash_password(password),
            display_name=display_name,
            disabled=False,
            custom_claims={},
        )
        self.db.add(identity)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise EmailAlreadyExistsError(
                "The email address is already in use by another account."
            ) from e
        logger.info("Identity created", extra={"uid": identity.uid})
        return identity

    def set_custom_claims(self, uid: str, claims: dict[str, Any]) -> None:
        """Replace uid's custom claims. Takes effect on the next issued token."""
        identity = self.get_user(uid)
        identity.custom_claims = dict(claims)
        self.db.commit()

    def delete_user(self, uid: str) -> None:
        """Delete the account for uid or raise IdentityNotFoundError."""
        identity = self.get_user(uid)
        self.db.delete(identity)
        self.db.commit()
        logger.info("Identity deleted", extra={"uid": uid})

    def authenticate(self, email: str, password: str) -> Identity | None:
        """Return the identity when email and password match, else None."""
        identity = self.find_user_by_email(email)
        if identity is None:
            return None
        if not verify_password(password, identity.password_hash):
            return None
        return identity
