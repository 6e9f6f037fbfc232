#!/usr/bin/env python3
"""
Create a user directly in the database, optionally with Mobilerun credentials.

Usage:
  python scripts/create_user.py --email owner@example.com --name "Owner" [--password secret123]
      [--api-key mr_xxx] [--device-id device-123]
"""
from __future__ import annotations

import argparse
import secrets
import sys

from guardian.core.security import hash_password
from guardian.db.session import create_all
from guardian.domain.users import MIN_PASSWORD_LENGTH, normalize_email, EMAIL_PATTERN
from guardian.repositories.sql_repository import SQLRepository


def gen_password(length: int = 16) -> str:
    return secrets.token_urlsafe(length)[:length]


def main() -> None:
    ap = argparse.ArgumentParser(description="Create a Guardian user")
    ap.add_argument("--email", required=True, help="Login e-mail (unique)")
    ap.add_argument("--name", required=True, help="Display name")
    ap.add_argument("--password", help="Password (default: random, printed once)")
    ap.add_argument("--api-key", help="Mobilerun API key for this user")
    ap.add_argument("--device-id", help="Mobilerun device id for this user")
    args = ap.parse_args()

    email = normalize_email(args.email)
    if not EMAIL_PATTERN.fullmatch(email):
        raise SystemExit("Invalid e-mail")
    name = (args.name or "").strip()
    if not name:
        raise SystemExit("Name is required")
    password = args.password or gen_password()
    if len(password) < MIN_PASSWORD_LENGTH:
        raise SystemExit(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    create_all()
    repo = SQLRepository()
    if repo.email_taken(email):
        raise SystemExit(f"User '{email}' already exists")
    user = repo.create_user(
        email,
        name,
        hash_password(password),
        mobilerun_api_key=(args.api_key or "").strip() or None,
        device_id=(args.device_id or "").strip() or None,
    )
    print("OK: user created")
    print(f"  id: {user.id}")
    print(f"  email: {email}")
    if not args.password:
        print(f"  password: {password}")
    if user.device_id:
        print(f"  device: {user.device_id}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
