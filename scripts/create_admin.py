#!/usr/bin/env python3
"""Create an administrator account, or promote an existing user.

Usage:
    # From project root:
    python scripts/create_admin.py --email admin@example.com --password 'S3cret!pass'

    # Promote an account that already registered through the API:
    python scripts/create_admin.py --email someone@example.com --promote
"""

import argparse
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from subscriptions_api.database import SessionLocal, init_db
from subscriptions_api.models.enums import UserRole
from subscriptions_api.services.auth import create_user, get_user_by_email


def create_admin(email: str, password: str | None, promote: bool) -> None:
    """Create or promote an administrator."""
    init_db()
    session = SessionLocal()

    try:
        user = get_user_by_email(session, email)
        if user is None:
            if promote or not password:
                raise SystemExit(f"No user with email {email}; pass --password to create one")
            user = create_user(session, email, password)
            print(f"Created user {user.id}")
        elif not promote:
            raise SystemExit(f"User {email} already exists; pass --promote to make them admin")

        user.role = UserRole.ADMIN
        user.is_verified = True
        session.commit()
        print(f"{email} is now an administrator")

    except Exception as e:
        session.rollback()
        print(f"Error creating administrator: {e}")
        raise
    finally:
        session.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--email", required=True)
    parser.add_argument("--password")
    parser.add_argument("--promote", action="store_true")
    args = parser.parse_args()
    create_admin(args.email, args.password, args.promote)
