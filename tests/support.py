"""Shared test helpers: an in-memory SQLite database built from the ORM metadata, and seeded users."""

import unittest

from sqlalchemy import create_engine, func
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.models import Base, Identity, RoleAuditEntry, SystemLogEntry, UserRecord
from app.schemas.auth import CallerIdentity
from app.services.event_log import SystemEventLog

# Placeholder hash for seeded identities that never sign in with a password.
UNUSABLE_PASSWORD_HASH = "!"


def make_engine():
    """Fresh in-memory SQLite engine with every table created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine


class DatabaseTestCase(unittest.TestCase):
    """TestCase with self.db (a session), self.session_factory and a working self.events log."""

    def setUp(self) -> None:
        self.engine = make_engine()
        self.session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        self.db: Session = self.session_factory()
        self.events = SystemEventLog(self.session_factory)

    def tearDown(self) -> None:
        self.db.close()
        self.engine.dispose()

    def add_user(
        self,
        uid: str,
        role: str = "member",
        email: str | None = None,
        password_hash: str = UNUSABLE_PASSWORD_HASH,
        with_record: bool = True,
        **fields: object,
    ) -> CallerIdentity:
        """Seed an identity (with role claim) and, unless with_record is False, its Role Store record."""
        email = email or f"{uid.lower()}@example.org"
        self.db.add(
            Identity(
                uid=uid,
                email=email,
                password_hash=password_hash,
                display_name=uid,
                disabled=False,
                custom_claims={"role": role},
            )
        )
        if with_record:
            self.db.add(UserRecord(uid=uid, email=email, role=role, **fields))
        self.db.commit()
        return CallerIdentity(uid=uid, email=email)

    def stored_role(self, uid: str) -> str | None:
        self.db.expire_all()
        record = self.db.get(UserRecord, uid)
        return None if record is None else record.role

    def claims(self, uid: str) -> dict | None:
        self.db.expire_all()
        identity = self.db.get(Identity, uid)
        return None if identity is None else dict(identity.custom_claims)

    def count(self, model: type) -> int:
        self.db.expire_all()
        return self.db.query(func.count()).select_from(model).scalar()

    def audit_entries(self) -> list[RoleAuditEntry]:
        self.db.expire_all()
        return self.db.query(RoleAuditEntry).order_by(RoleAuditEntry.id).all()

    def system_events(self, event_type: str | None = None) -> list[SystemLogEntry]:
        self.db.expire_all()
        query = self.db.query(SystemLogEntry)
        if event_type is not None:
            query = query.filter(SystemLogEntry.type == event_type)
        return query.order_by(SystemLogEntry.id).all()
