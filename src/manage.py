"""Boutique database management CLI.

Creates and drops the SQL schema for the boutique domain. With the default
(in-memory) configuration there is nothing to create; run with
``PROTEAN_ENV=production`` to target PostgreSQL.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys


def setup_database():
    """Create the database schema for every SQL provider."""
    from boutique.domain import boutique
    from boutique.utils.db import setup_db

    print("Initializing boutique domain...")
    boutique.init()
    print("Creating boutique database schema...")
    providers = setup_db(boutique)
    if providers:
        print(f"  Schema ready on: {', '.join(providers)}.")
    else:
        print("  No SQL provider configured; nothing to create.")

    print("Done.")


def drop_database():
    """Drop the database schema for every SQL provider."""
    from boutique.domain import boutique
    from boutique.utils.db import drop_db

    print("Initializing boutique domain...")
    boutique.init()
    print("Dropping boutique database schema...")
    providers = drop_db(boutique)
    if providers:
        print(f"  Schema dropped on: {', '.join(providers)}.")
    else:
        print("  No SQL provider configured; nothing to drop.")

    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="Boutique database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
