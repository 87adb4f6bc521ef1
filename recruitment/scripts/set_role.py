"""
Change a user's role by email, e.g. to bootstrap the first HR or ADMIN account.
Usage: python -m recruitment.scripts.set_role user@example.com HR
"""
import sys

from recruitment.database import SessionLocal, ensure_tables_exist
from recruitment.models.user import ROLES
from recruitment.repos.user_repo import get_by_email, update


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if len(args) < 2:
        print(f"Usage: python -m recruitment.scripts.set_role <email> <{'|'.join(ROLES)}>")
        return 1
    email, role = args[0].strip(), args[1].strip().upper()
    if role not in ROLES:
        print(f"Unknown role: {role}. Expected one of {', '.join(ROLES)}")
        return 1
    ensure_tables_exist()
    db = SessionLocal()
    try:
        user = get_by_email(db, email)
        if not user:
            print(f"User not found: {email}")
            return 1
        update(db, user.id, role=role)
        print(f"Set role of {email} to {role}.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
