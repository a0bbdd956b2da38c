"""
Create a user directly in the database (e.g. the first admin). Run from project root:
  python -m forum.scripts.create_user USERNAME PASSWORD [role]
Example:
  python -m forum.scripts.create_user admin s3cret admin
"""
import argparse
import logging
import sys

from forum.core.config import get_settings
from forum.core.database import SessionLocal
from forum.core.log import configure_logging
from forum.services import users as user_service
from forum.services.persistence import PersistenceError
from forum.services.validation import USER_ROLES, validate_user

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a forum user without going through the API.")
    parser.add_argument("username", help="Username (3-20 alphanumeric chars)")
    parser.add_argument("password", help="Password (4-30 chars)")
    parser.add_argument("role", nargs="?", default="member", choices=list(USER_ROLES))
    args = parser.parse_args(argv)

    configure_logging(get_settings().LOG_LEVEL)
    username = args.username.strip()
    error = validate_user(username, args.password, args.role)
    if error:
        print(error, file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        if user_service.get_user_by_username(db, username) is not None:
            print(f"User '{username}' already exists.", file=sys.stderr)
            return 1
        user = user_service.create_user(db, username, args.password, args.role)
        print(f"Created user '{username}' (user_id={user.user_id}) with role '{args.role}'.")
        return 0
    except PersistenceError as e:
        logger.exception("Could not create user: %s", e.message)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
