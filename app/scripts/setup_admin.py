"""
Grant a role to an existing account (e.g. the first admin). Run from project root:
  python -m app.scripts.setup_admin EMAIL [role]
Example:
  python -m app.scripts.setup_admin admin@example.com admin

The account must already exist (register through the portal first). The user
must sign out and back in for the new role claim to appear in their token.
"""
import argparse
import logging
import sys

from sqlalchemy.orm import Session

from app.core.database import SessionLocal
from app.services import audit, role_store
from app.services.identity import IdentityNotFoundError, IdentityProvider
from app.services.rbac import ALLOWED_ROLES, Role

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

SETUP_ACTOR = "system"
SETUP_ACTOR_EMAIL = "setup-script"
SETUP_NOTE = "Initial admin setup"


def setup_role(db: Session, email: str, role: Role) -> str:
    """Set role for the account with email in claims and Role Store, with an audit entry. Returns uid."""
    provider = IdentityProvider(db)
    identity = provider.get_user_by_email(email)
    uid = identity.uid
    old_role = role_store.get_stored_role(db, uid)

    provider.set_custom_claims(uid, {"role": role.value})
    role_store.upsert_user_record(db, uid, email=identity.email, role=role.value)
    audit.append_role_change(
        db,
        target_user_id=uid,
        changed_by=SETUP_ACTOR,
        changed_by_email=SETUP_ACTOR_EMAIL,
        old_role=old_role,
        new_role=role.value,
        note=SETUP_NOTE,
    )
    db.commit()
    return uid


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Grant a role to an existing Quorum account.")
    parser.add_argument("email", help="Email of a registered account")
    parser.add_argument("role", nargs="?", default=Role.ADMIN.value, choices=ALLOWED_ROLES)
    args = parser.parse_args(argv)

    email = args.email.strip()
    if not email:
        print("Email is required.", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        uid = setup_role(db, email, Role(args.role))
    except IdentityNotFoundError:
        print(
            f"User with email {email} does not exist. Please register first.",
            file=sys.stderr,
        )
        return 1
    except Exception as e:
        db.rollback()
        logger.exception("Role setup failed: %s", e)
        return 1
    finally:
        db.close()
    print(f"User {email} ({uid}) is now {args.role}. They must sign out and back in.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
