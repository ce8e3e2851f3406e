"""Print an access token for a user id.

Useful when ``AUTH_REQUIRED`` is enabled and you want to call the
category or product write endpoints without going through
``POST /auth/login``.  The token is signed with ``SECRET_KEY`` from
the environment.

Usage:
    python create_token.py 1 --minutes 1440
"""
import argparse

from catalog_api.app.core.config import settings
from catalog_api.app.core.security import create_access_token


def main() -> None:
    ap = argparse.ArgumentParser(description="Issue a Catalog API access token.")
    ap.add_argument("user_id", type=int, help="Id of the user the token is issued for")
    ap.add_argument(
        "--minutes",
        type=int,
        default=settings.access_token_expire_minutes,
        help="Token lifetime in minutes (default: ACCESS_TOKEN_EXPIRE_MINUTES)",
    )
    args = ap.parse_args()

    token = create_access_token(
        {"sub": str(args.user_id), "id": args.user_id},
        settings.secret_key,
        args.minutes * 60,
        settings.algorithm,
    )
    print(token)


if __name__ == "__main__":
    main()
