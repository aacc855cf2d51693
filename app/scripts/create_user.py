"""
Create a user (e.g. the first admin) without going through registration. Run from project root:
  python -m app.scripts.create_user EMAIL PASSWORD [role] [--name NAME]
Example:
  python -m app.scripts.create_user admin@example.com your-secure-password ADMIN --name "Site Admin"
"""
import argparse
import logging
import sys

from email_validator import EmailNotValidError, validate_email

from app.core.config import settings
from app.core.database import session_scope
from app.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN, hash_password
from app.models.user import ROLE_USER, ROLES
from app.services.credential_store import SqlAlchemyCredentialStore
from app.services.errors import ConflictError

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=settings.LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    parser = argparse.ArgumentParser(description="Create a portfolio API user.")
    parser.add_argument("email", help="Login email")
    parser.add_argument(
        "password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)"
    )
    parser.add_argument(
        "role", nargs="?", default=ROLE_USER, type=str.upper, choices=list(ROLES)
    )
    parser.add_argument("--name", default=None, help="Display name (defaults to the email's local part)")
    args = parser.parse_args(argv)

    try:
        email = validate_email(args.email.strip(), check_deliverability=False).normalized
    except EmailNotValidError as e:
        print(f"Invalid email: {e}", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print(
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.",
            file=sys.stderr,
        )
        return 1
    name = (args.name or email.split("@", 1)[0]).strip()

    with session_scope() as db:
        store = SqlAlchemyCredentialStore(db)
        try:
            user = store.create_user(
                name=name,
                email=email,
                password_hash=hash_password(args.password),
                role=args.role,
            )
        except ConflictError:
            print(f"User '{email}' already exists.", file=sys.stderr)
            return 1
    logger.info("User created from CLI", extra={"user_id": user.id, "role": user.role})
    print(f"Created user '{email}' with role '{user.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
