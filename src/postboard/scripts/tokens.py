"""Issue a bearer token for local testing.

Token issuance is not part of the API; this script signs a token with the
configured secret so a developer can call the mutating endpoints.

Usage:
    python -m postboard.scripts.tokens --user-id alice --email alice@example.com
"""

from __future__ import annotations

import argparse
import sys
from datetime import timedelta

from postboard.core.security import create_access_token


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Print a signed bearer token.")
    parser.add_argument("--user-id", required=True, help="Subject recorded as the post creator")
    parser.add_argument("--email", default=None, help="Optional email claim")
    parser.add_argument(
        "--minutes",
        type=int,
        default=None,
        help="Token lifetime in minutes (defaults to ACCESS_TOKEN_EXPIRE_MINUTES)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.minutes is not None and args.minutes <= 0:
        print("--minutes must be positive", file=sys.stderr)
        return 2
    expires = timedelta(minutes=args.minutes) if args.minutes is not None else None
    print(create_access_token(args.user_id, email=args.email, expires_delta=expires))
    return 0


if __name__ == "__main__":
    sys.exit(main())
