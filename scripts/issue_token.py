#!/usr/bin/env python3
"""
Development Token Script

Issues a bearer token the API accepts, signed with SNIPPETBOX_JWT_SECRET_KEY.

Usage:
    python scripts/issue_token.py --uid USER_ID --email user@example.com [options]

Options:
    --uid           User id to embed (required)
    --email         Email to embed (required)
    --minutes       Token lifetime in minutes (default: settings value)
"""

from __future__ import annotations

import argparse
from datetime import timedelta

from snippetbox.core.security import create_access_token


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Issue a Snippetbox bearer token")
    parser.add_argument("--uid", required=True, help="User id to embed")
    parser.add_argument("--email", required=True, help="Email to embed")
    parser.add_argument("--minutes", type=int, default=None, help="Token lifetime in minutes")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    expires = timedelta(minutes=args.minutes) if args.minutes else None
    print(create_access_token(args.uid, args.email, expires_delta=expires))


if __name__ == "__main__":
    main()
