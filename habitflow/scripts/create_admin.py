#!/usr/bin/env python3
"""
Create an admin account, or promote an existing user to admin.

Usage:
    python -m habitflow.scripts.create_admin
    python -m habitflow.scripts.create_admin --promote user@example.com
"""
import argparse
import getpass
import sys

from pydantic import ValidationError

from habitflow.database import engine, Base, SessionLocal
from habitflow import models  # Import to register all models
from habitflow.constants import ROLE_ADMIN
from habitflow.exceptions import ConflictException, UserNotFoundException
from habitflow.schemas import RegisterRequest
from habitflow.services.user_service import UserService


def promote(email: str) -> int:
    db = SessionLocal()
    try:
        user = UserService(db).promote_to_admin(email)
        print(f"User \"{user.username}\" ({user.email}) is now an admin!")
        return 0
    except UserNotFoundException:
        print(f"No user found with email: {email}")
        return 1
    finally:
        db.close()


def create_interactive() -> int:
    print("HabitFlow - Create Admin User\n")
    username = input("Username: ").strip()
    email = input("Email: ").strip()
    password = getpass.getpass("Password (min 6 chars): ")

    try:
        data = RegisterRequest(username=username, email=email, password=password)
    except ValidationError as e:
        for error in e.errors():
            print(f"✗ {error['loc'][0]}: {error['msg']}")
        return 1

    db = SessionLocal()
    try:
        user, _ = UserService(db).register(data, role=ROLE_ADMIN)
    except ConflictException as e:
        print(f"✗ {e}")
        return 1
    finally:
        db.close()

    print("\n✓ Admin created successfully!")
    print(f"  Username : {user.username}")
    print(f"  Email    : {user.email}")
    print(f"  Role     : {user.role}")
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Create or promote a HabitFlow admin")
    parser.add_argument("--promote", metavar="EMAIL", help="make an existing user admin")
    args = parser.parse_args(argv)

    Base.metadata.create_all(bind=engine)

    if args.promote:
        return promote(args.promote)
    return create_interactive()


if __name__ == "__main__":
    sys.exit(main())
