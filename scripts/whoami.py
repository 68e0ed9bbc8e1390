#!/usr/bin/env python3
"""
Sign in through the hosted auth service and print what the session mirror sees.
Usage: python scripts/whoami.py --email me@example.com --password secret
"""
import sys
import argparse
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv
load_dotenv(project_root / ".env")

from agroguide.core.logging_config import configure_logging
from agroguide.services.auth.client import AuthServiceError, HostedAuthClient
from agroguide.services.auth.service import load_profile
from agroguide.services.auth.session import SessionMirror


def main():
    parser = argparse.ArgumentParser(description="Show the mirrored session for an account")
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", required=True)
    parser.add_argument("--keep-session", action="store_true", help="Do not sign out at the end")
    args = parser.parse_args()

    configure_logging()

    client = HostedAuthClient()
    mirror = SessionMirror(client, load_profile)
    mirror.start()
    try:
        client.sign_in_with_password(args.email, args.password)
    except AuthServiceError as e:
        print(f"❌ Sign in failed: {e.message}")
        sys.exit(1)

    profile = mirror.profile
    print(f"User ID: {mirror.user.id}")
    print(f"Email: {mirror.user.email or 'N/A'}")
    print(f"Display Name: {getattr(profile, 'display_name', None) or 'N/A'}")
    print(f"Role: {'admin' if mirror.is_admin else 'user'}")

    if not args.keep_session:
        error = mirror.sign_out()
        print("Signed out." if error is None else f"⚠️  Sign out failed: {error.message}")
    mirror.stop()


if __name__ == "__main__":
    main()
