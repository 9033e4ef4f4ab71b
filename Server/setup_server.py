#!/usr/bin/env python3
"""
GreenPlan Server - First-run Setup

Creates the database schema and, when no admin account exists yet, an
admin account with a generated password. Safe to run again: existing
tables and accounts are left alone.

Configuration comes from the same GREENPLAN_* environment variables and
.env file the server reads.

Usage:
    python setup_server.py
    python setup_server.py --yes --admin-username ops
"""

import argparse
import sys
from pathlib import Path

# Ensure we can import from the same directory
sys.path.insert(0, str(Path(__file__).parent))

from sqlalchemy import inspect

from config import GetSettings, Settings
from managers import DatabaseManager


RULE = "=" * 70


def print_section(title):
    """Print section header"""
    print()
    print("-" * 70)
    print(f"  {title}")
    print("-" * 70)


def print_configuration(settings: Settings, db_manager: DatabaseManager):
    """Show where setup is about to write"""
    print_section("Configuration")
    print(f"  Database:     {db_manager.engine.url.render_as_string(hide_password=True)}")
    print(f"  Pool size:    {settings.db_pool_size}")
    print(f"  CORS origins: {', '.join(settings.cors_origins_list) or '(none)'}")

    if settings.uses_default_secret:
        print()
        print("  [WARN] GREENPLAN_JWT_SECRET is not set; tokens will be signed with")
        print("         the development secret. Set it before going live.")


def confirm(assume_yes: bool) -> bool:
    """Ask before touching the database unless --yes was given"""
    if assume_yes:
        return True
    try:
        return input("\nContinue with setup? (Y/n): ").strip().lower() != "n"
    except (KeyboardInterrupt, EOFError):
        print()
        return False


def create_schema(db_manager: DatabaseManager) -> list:
    """
    Create any missing tables

    Returns:
        list: Names of the tables that did not exist before
    """
    print_section("Schema")

    existing = set(inspect(db_manager.engine).get_table_names())
    db_manager.InitializeDatabase()
    tables = inspect(db_manager.engine).get_table_names()

    for table in sorted(tables):
        state = "exists" if table in existing else "created"
        print(f"  {table:<20} {state}")

    return [table for table in tables if table not in existing]


def bootstrap_admin(db_manager: DatabaseManager, username: str):
    """
    Create the admin account if no admin exists

    Returns:
        str or None: Generated password, or None when an admin already exists
    """
    print_section("Admin Account")

    password = db_manager.EnsureAdminAccount(username)
    if password is None:
        print("  An admin account already exists - nothing to do.")
        return None

    print()
    print("!" * 70)
    print("!  SAVE THESE CREDENTIALS - THE PASSWORD IS SHOWN ONLY ONCE")
    print("!" * 70)
    print()
    print(f"  Username: {username}")
    print(f"  Password: {password}")
    return password


def main():
    """Main setup script entry point"""
    parser = argparse.ArgumentParser(
        description="Initialize the GreenPlan Server database",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument(
        "--yes", "-y",
        action="store_true",
        help="Do not ask for confirmation"
    )

    parser.add_argument(
        "--admin-username",
        type=str,
        default="admin",
        help="Username for the bootstrap admin account (default: admin)"
    )

    args = parser.parse_args()

    if not args.admin_username.strip():
        parser.error("--admin-username must not be empty")

    print(RULE)
    print("GreenPlan Server - First-run Setup")
    print(RULE)

    settings = GetSettings()
    db_manager = DatabaseManager(
        settings.database_url,
        pool_size=settings.db_pool_size,
        ssl_ca=settings.db_ssl_ca,
        bcrypt_rounds=settings.bcrypt_rounds
    )

    try:
        print_configuration(settings, db_manager)

        if not confirm(args.yes):
            print("\nSetup cancelled.")
            sys.exit(0)

        try:
            create_schema(db_manager)
            bootstrap_admin(db_manager, args.admin_username.strip())
        except Exception as e:
            print(f"\n[ERROR] Setup failed: {e}")
            sys.exit(1)
    finally:
        db_manager.Dispose()

    print()
    print(RULE)
    print("[OK] Setup complete. Start the server with: python server.py")
    print(RULE)


if __name__ == "__main__":
    main()
