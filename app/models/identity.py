"""ORM model for identity provider accounts (credentials and custom claims)."""

from sqlalchemy import JSON, Boolean, Column, DateTime, String, func
from sqlalchemy.dialects.postgresql import JSONB

from app.models.base import Base


class Identity(Base):
    """
    Sign-in account owned by the identity provider.

    custom_claims carries the role claim attached to issued identity tokens.
    Only app.services.identity reads or writes this table.

    disabled is set by operators only; no API operation changes it. It blocks
    sign-in and token use, unlike UserRecord.is_active, which is a portal
    status flag.
    """

    __tablename__ = "identities"

    uid = Column(String(128), primary_key=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    display_name = Column(String(512), nullable=False, default="")
    disabled = Column(Boolean, nullable=False, default=False)
    custom_claims = Column(
        JSON().with_variant(JSONB(), "postgresql"),
        nullable=False,
        default=dict,
    )
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
