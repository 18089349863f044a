#!/usr/bin/env python3
"""Create the bootstrap admin user from ADMIN_EMAIL / ADMIN_PASSWORD / ADMIN_FULL_NAME"""

import sys
import os
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from dotenv import load_dotenv

load_dotenv()

from app.db.database import SessionLocal
from app.services.bootstrap import ensure_admin


def create_admin():
    db = SessionLocal()
    try:
        admin = ensure_admin(db)
        if admin is None:
            print("ADMIN_PASSWORD is not set, no admin account created")
            sys.exit(1)
        print(f"Admin account ready: {admin.email}")
    except Exception as e:
        db.rollback()
        print(f"Error creating admin: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    create_admin()
