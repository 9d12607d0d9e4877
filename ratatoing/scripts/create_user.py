"""
Create an active user (e.g. the first Banson) without going through the approval queue.
Run from project root:
  python -m ratatoing.scripts.create_user USERNAME PASSWORD NAME [--rank RANK] [--job JOB]
Example:
  python -m ratatoing.scripts.create_user remy your-secure-password "Remy" --rank Banson
"""
import argparse
import logging
import sys

from ratatoing.core.config import get_settings
from ratatoing.core.database import SessionLocal
from ratatoing.core.enums import JOB_VALUES, Rank, UserStatus
from ratatoing.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
    hash_password,
)
from ratatoing.models.user import User
from ratatoing.services.authorization import has_authority
from ratatoing.services.registration import (
    EMAIL_DOMAIN,
    generate_cell_digits,
    get_user_by_username,
)

logger = logging.getLogger(__name__)


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    parser = argparse.ArgumentParser(description="Create an active Ratatoing user (bypasses approval).")
    parser.add_argument("username", help=f"Username ({USERNAME_MIN_LEN}-{USERNAME_MAX_LEN} chars)")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("name", help="Display name")
    parser.add_argument(
        "--rank",
        default=Rank.NIBBLER.value,
        choices=[r.value for r in Rank],
        help="Rank of the new user (default: Nibbler)",
    )
    parser.add_argument("--job", default=None, choices=sorted(JOB_VALUES))
    args = parser.parse_args()

    username = args.username.strip()
    if len(username) < USERNAME_MIN_LEN or len(username) > USERNAME_MAX_LEN:
        print("Invalid username length.", file=sys.stderr)
        return 1
    if len(args.password) < PASSWORD_MIN_LEN or len(args.password) > PASSWORD_MAX_LEN:
        print(f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1

    rank = Rank(args.rank)
    balance = get_settings().ADMIN_STARTING_BALANCE if has_authority(rank) else 0

    db = SessionLocal()
    try:
        if get_user_by_username(db, username) is not None:
            print(f"User '{username}' already exists.", file=sys.stderr)
            return 1
        user = User(
            username=username,
            password_hash=hash_password(args.password),
            name=args.name.strip() or username,
            email=f"{username.lower()}@{EMAIL_DOMAIN}",
            cell_digits=generate_cell_digits(db),
            rank=rank.value,
            status=UserStatus.ACTIVE.value,
            job=args.job,
            pocket_sniffles=balance,
        )
        db.add(user)
        db.commit()
        logger.info("User created", extra={"user_id": user.id, "rank": rank.value})
        print(f"Created user '{username}' with rank '{rank.value}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
