"""
Create a user (e.g. first admin). Run from project root:
  python -m larder.scripts.create_user NAME EMAIL PASSWORD [role]
Example:
  python -m larder.scripts.create_user "Admin" admin@example.com your-secure-password ADMIN
"""
import argparse
import sys

from larder.core.database import session_scope
from larder.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN, hash_password
from larder.models import ROLE_ADMIN, ROLE_USER
from larder.repositories import roles as role_store
from larder.repositories import users as user_store
from larder.schemas.auth import EMAIL_PATTERN


def main() -> int:
    parser = argparse.ArgumentParser(description="Create a Larder user.")
    parser.add_argument("name", help="Display name (1-255 chars)")
    parser.add_argument("email", help="Email address, used to sign in")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("role", nargs="?", default=ROLE_USER, choices=[ROLE_USER, ROLE_ADMIN])
    args = parser.parse_args()

    name = args.name.strip()
    email = args.email.strip().lower()
    if not name or len(name) > 255:
        print("Invalid name length.", file=sys.stderr)
        return 1
    if not EMAIL_PATTERN.match(email):
        print("Invalid email address.", file=sys.stderr)
        return 1
    if not PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN:
        print(
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.",
            file=sys.stderr,
        )
        return 1

    with session_scope() as db:
        if user_store.get_by_email(db, email) is not None:
            print(f"User '{email}' already exists.", file=sys.stderr)
            return 1
        role = role_store.upsert_role(db, args.role)
        user_store.create_user(
            db,
            name=name,
            email=email,
            password_hash=hash_password(args.password),
            role_ids=[role.id],
        )
        db.commit()
    print(f"Created user '{email}' with role '{args.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
