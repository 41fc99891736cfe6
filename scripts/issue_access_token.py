"""Utility script to issue an access token for a staff member."""

from __future__ import annotations

import argparse
from datetime import timedelta

from servio.domain.entities import ROLE_MANAGER, ROLE_OWNER, ROLE_STAFF
from servio.infrastructure.security import create_staff_token


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for token creation."""

    parser = argparse.ArgumentParser(
        description="Issue a bearer token for calling the Servio notifications API.",
    )
    parser.add_argument("--user-id", required=True, help="Identifier of the staff member")
    parser.add_argument(
        "--restaurant-id", required=True, help="Restaurant the staff member belongs to"
    )
    parser.add_argument(
        "--role",
        default=ROLE_STAFF,
        choices=(ROLE_OWNER, ROLE_MANAGER, ROLE_STAFF),
        help="Role claim carried by the token (default: staff)",
    )
    parser.add_argument(
        "--expires-minutes",
        type=int,
        default=None,
        help="Token lifetime in minutes. Defaults to ACCESS_TOKEN_EXPIRE_MINUTES.",
    )
    return parser.parse_args()


def main() -> None:
    """Print a token built from the provided command line arguments."""

    args = parse_args()
    expires = timedelta(minutes=args.expires_minutes) if args.expires_minutes else None
    print(create_staff_token(args.user_id, args.restaurant_id, args.role, expires))


if __name__ == "__main__":
    main()
