"""
Create a user with an explicit role (e.g. the first admin). Registration always
assigns REGULAR_USER, so admins are created here. Run from project root:
  python -m charity.scripts.create_user USERNAME EMAIL PASSWORD [role]
Example:
  python -m charity.scripts.create_user admin admin@example.org your-secure-password ADMIN
"""
import argparse
import logging
import sys

from charity.core.config import get_settings
from charity.core.database import SessionLocal
from charity.core.errors import DuplicateUserError, StorageError
from charity.core.security import PasswordVerifier
from charity.models import User
from charity.repositories import SqlUserDirectory
from charity.schemas.auth import PASSWORD_MAX_LEN, USERNAME_MAX_LEN, Role

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a charity user with a chosen role.")
    parser.add_argument("username", help=f"Username (1-{USERNAME_MAX_LEN} chars)")
    parser.add_argument("email", help="Email address (must be unique)")
    parser.add_argument("password", help=f"Password (1-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument(
        "role",
        nargs="?",
        default=Role.REGULAR_USER.value,
        choices=[r.value for r in Role],
    )
    args = parser.parse_args(argv)

    username = args.username.strip()
    if not username or len(username) > USERNAME_MAX_LEN:
        print("Invalid username length.", file=sys.stderr)
        return 1
    if not args.password or len(args.password) > PASSWORD_MAX_LEN:
        print(f"Password must be 1-{PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1

    passwords = PasswordVerifier(rounds=get_settings().BCRYPT_ROUNDS)
    db = SessionLocal()
    try:
        users = SqlUserDirectory(db)
        if users.exists_by_username(username):
            print(f"User '{username}' already exists.", file=sys.stderr)
            return 1
        users.save(
            User(
                username=username,
                email=args.email.strip(),
                password_hash=passwords.hash(args.password),
                role=args.role,
            )
        )
        print(f"Created user '{username}' with role '{args.role}'.")
        return 0
    except DuplicateUserError:
        print(f"Username '{username}' or email '{args.email}' is already registered.", file=sys.stderr)
        return 1
    except StorageError as e:
        logger.exception("Could not create user: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    sys.exit(main())
