"""
Create a user (e.g. first admin). Run from project root:
  python -m poseidon.scripts.create_user USERNAME PASSWORD FULLNAME [role]
Example:
  python -m poseidon.scripts.create_user admin 'S3cure!pass' "Administrator" ADMIN
"""
import argparse
import logging
import sys

from pydantic import ValidationError

from poseidon.core.config import get_settings
from poseidon.core.database import SessionLocal
from poseidon.core.security import PasswordHasher
from poseidon.schemas.user import Role, UserCreateForm
from poseidon.services.user_service import DuplicateUsernameError, UserService

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Poseidon user account.")
    parser.add_argument("username", help="Username (3-50 chars)")
    parser.add_argument("password", help="Password (8+ chars, one uppercase, one digit, one symbol)")
    parser.add_argument("fullname", help="Full name (up to 100 chars)")
    parser.add_argument("role", nargs="?", default=Role.USER.value, choices=[r.value for r in Role])
    args = parser.parse_args(argv)

    try:
        form = UserCreateForm(
            username=args.username,
            password=args.password,
            fullname=args.fullname,
            role=args.role,
        )
    except ValidationError as e:
        for field_name, message in UserCreateForm.errors_by_field(e).items():
            print(f"{field_name}: {message}", file=sys.stderr)
        return 1

    settings = get_settings()
    service = UserService(PasswordHasher(rounds=settings.BCRYPT_ROUNDS))
    db = SessionLocal()
    try:
        user = service.create_from_form(db, form)
    except DuplicateUsernameError:
        print(f"User '{form.username}' already exists.", file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user '{user.username}' with role '{user.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
