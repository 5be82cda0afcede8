"""ORM model for the Role Store: one record per user, keyed by identity id."""

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, String, Text, func

from app.models.base import Base


class UserRecord(Base):
    """
    Role and profile attributes for a portal user.

    uid is the id assigned by the identity provider. role is one of
    'member', 'executive', 'admin' and is authoritative for authorization.
    """

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("role IN ('member', 'executive', 'admin')", name="ck_users_role_allowed"),
    )

    uid = Column(String(128), primary_key=True)
    email = Column(String(255), nullable=True, index=True)
    first_name = Column(String(255), nullable=False, default="")
    last_name = Column(String(255), nullable=False, default="")
    display_name = Column(String(512), nullable=False, default="")
    role = Column(String(32), nullable=False, default="member", index=True)
    department = Column(String(255), nullable=False, default="")
    is_active = Column(Boolean, nullable=False, default=True)
    profile_complete = Column(Boolean, nullable=False, default=False)

    # Self-service profile fields
    phone = Column(String(64), nullable=False, default="")
    birthday = Column(String(32), nullable=False, default="")
    position = Column(String(255), nullable=False, default="")
    location = Column(String(255), nullable=False, default="")
    bio = Column(Text, nullable=False, default="")

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    last_login_at = Column(DateTime(timezone=True), nullable=True)
    deactivated_at = Column(DateTime(timezone=True), nullable=True)
