#!/usr/bin/env python3
"""
Create a dashboard user on the configured storage backend.
Run from the repo root: python -m scripts.create_user <username> <password> [--name NAME] [--admin]

Without arguments, creates the admin named by FIRST_ADMIN_USERNAME / FIRST_ADMIN_PASSWORD in .env.
"""
import argparse
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))


async def main(argv=None):
    from brandops.config import get_settings
    from brandops.schemas import UserCreate
    from brandops.storage.errors import StorageError
    from brandops.storage.factory import build_storage

    parser = argparse.ArgumentParser(description="Create a BrandOps user")
    parser.add_argument("username", nargs="?")
    parser.add_argument("password", nargs="?")
    parser.add_argument("--name", default=None)
    parser.add_argument("--admin", action="store_true", help="Give the user the admin role")
    args = parser.parse_args(argv)

    settings = get_settings()
    username = args.username or settings.first_admin_username
    password = args.password or settings.first_admin_password
    role = "admin" if args.admin or not args.username else "user"
    if not username or not password:
        print("Error: pass <username> <password> or set FIRST_ADMIN_USERNAME and FIRST_ADMIN_PASSWORD in .env")
        sys.exit(1)

    if settings.storage_backend == "memory":
        print("Warning: STORAGE_BACKEND=memory; the user only lives as long as this process.")

    storage = build_storage(settings)
    try:
        await storage.startup()
        if await storage.get_user_by_username(username):
            print(f"User already exists: {username}")
            sys.exit(0)
        user = await storage.create_user(UserCreate(username=username, password=password, name=args.name, role=role))
        print(f"Created {user.role} user: {user.username} (id={user.id})")
    except StorageError as e:
        print(f"Error: {e}")
        sys.exit(1)
    finally:
        await storage.close()


if __name__ == "__main__":
    asyncio.run(main())
