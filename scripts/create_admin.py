#!/usr/bin/env python3
"""
Give an existing auth user the admin role from the command line.
The user must already exist in the hosted auth service; this only touches profiles.
Usage: python scripts/create_admin.py --user-id <uuid> --display-name "Admin Name"
"""
import sys
import argparse
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv
load_dotenv(project_root / ".env")

from sqlalchemy.orm import Session
from agroguide.db.postgres import get_db
from agroguide.db.models.enums import AppRoleEnum
from agroguide.db.models.profile import Profile
from agroguide.services.auth.service import ProfileService


def create_admin_user(user_id: str, display_name: str | None = None):
    """Promote (or create) the profile of user_id to admin"""
    db: Session = next(get_db())

    try:
        existing_admin = db.query(Profile).filter(Profile.role == AppRoleEnum.ADMIN).first()
        if existing_admin and existing_admin.user_id != user_id:
            print(f"⚠️  An admin already exists: {existing_admin.display_name or existing_admin.user_id}")
            response = input("Do you want to add another admin? (yes/no): ").strip().lower()
            if response not in ['yes', 'y']:
                print("❌ Cancelled.")
                return

        profile = ProfileService(db).promote_to_admin(user_id=user_id, display_name=display_name)

        print(f"\n✅ Admin role granted!")
        print(f"   User ID: {profile.user_id}")
        print(f"   Display Name: {profile.display_name or 'N/A'}")
        print(f"   Role: {profile.role.value}")
        print(f"\n📝 Sign in with this account to open the admin dashboard.")

    except Exception as e:
        db.rollback()
        print(f"❌ Error granting admin role: {e}")
        raise
    finally:
        db.close()

def main():
    parser = argparse.ArgumentParser(description="Grant the admin role to an auth user")
    parser.add_argument("--user-id", required=True, help="Auth user id (UUID) from the hosted auth service")
    parser.add_argument("--display-name", help="Display name shown on the dashboard (optional)")

    args = parser.parse_args()

    print("🔐 Granting admin role...")
    print(f"   User ID: {args.user_id}")
    print(f"   Display Name: {args.display_name or 'N/A'}")
    print()

    create_admin_user(user_id=args.user_id, display_name=args.display_name)

if __name__ == "__main__":
    main()
