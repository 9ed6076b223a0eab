"""
Script to create an ADMIN account, or promote an existing account to ADMIN.

Admin accounts cannot be self-registered through the API. Run this script
from the project root:
    python create_admin.py admin@example.com
"""

import getpass
import os
import sys

# Add app to Python path
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from app.core.database import SessionLocal, init_db
from app.schemas.user import validate_password_strength
from app.services import user_service


def create_admin(email: str):
    """Create or promote the admin account for the given email."""
    init_db()
    db = SessionLocal()

    try:
        password = getpass.getpass(f"Password for {email} (ignored if the account exists): ")
        try:
            validate_password_strength(password)
        except ValueError as e:
            print(f"✗ {e}")
            sys.exit(1)

        username = input("Username [admin]: ").strip() or "admin"

        user = user_service.ensure_admin(db, email, password, username)
        print(f"✓ {user.email} (ID: {user.id}) is now an ADMIN")

    except Exception as e:
        db.rollback()
        print(f"\n✗ Error creating admin: {e}")
        print("Database changes have been rolled back.")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("Usage: python create_admin.py <email>")
        sys.exit(1)
    create_admin(sys.argv[1])
