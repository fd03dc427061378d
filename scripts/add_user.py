#!/usr/bin/env python3
"""
Register a user directly against the configured database.

Usage:
  python scripts/add_user.py --first Ada --last Lovelace --username adal \
      --email ada@example.com --phone "+44 20 7946 0000" [--password ...]
"""
from __future__ import annotations

import argparse
import secrets
import sys

from accounts.core.config import get_settings
from accounts.core.errors import AccountsError
from accounts.core.security import Argon2PasswordHasher
from accounts.core.tokens import JwtTokenIssuer
from accounts.db.create_tables import create_all
from accounts.repositories.sql_repository import SQLRepository
from accounts.services.user_service import UserService


def gen_password(length: int = 16) -> str:
    return secrets.token_urlsafe(length)[:length]


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Register a user in the accounts database")
    ap.add_argument("--first", required=True, help="First name")
    ap.add_argument("--last", required=True, help="Last name")
    ap.add_argument("--username", required=True, help="Username (4-15 chars)")
    ap.add_argument("--email", required=True, help="Email address")
    ap.add_argument("--phone", required=True, help="Phone number")
    ap.add_argument("--password", help="Password (default: random 16 chars)")
    args = ap.parse_args(argv)

    settings = get_settings()
    create_all(settings.database_url)
    svc = UserService(
        repository=SQLRepository(settings.database_url),
        hasher=Argon2PasswordHasher(),
        tokens=JwtTokenIssuer(settings.token_secret, ttl_seconds=settings.token_ttl_seconds),
    )
    password = args.password or gen_password()
    try:
        result = svc.register(
            {
                "firstName": args.first,
                "lastName": args.last,
                "userName": args.username,
                "email": args.email,
                "phone": args.phone,
                "password": password,
            }
        )
    except AccountsError as exc:
        sys.stderr.write(f"Error: {exc.message}\n")
        for field, detail in (exc.data or {}).items():
            sys.stderr.write(f"  {field}: {detail['message']}\n")
        return 1

    print("OK: user registered")
    print(f"  id: {result.user.id}")
    print(f"  username: {result.user.user_name}")
    if not args.password:
        print(f"  password: {password}")
    print(f"  token: {result.token}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
