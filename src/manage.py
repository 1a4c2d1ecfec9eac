"""WelwExpress management CLI.

Creates and drops the database schema and bootstraps the first administrator.
PROTEAN_ENV selects the database overlay from ``domain.toml``.

Usage:
    PROTEAN_ENV=sqlite python src/manage.py setup-db
    PROTEAN_ENV=sqlite python src/manage.py drop-db
    PROTEAN_ENV=sqlite python src/manage.py create-admin --name Admin --email admin@welw.ao
"""

import argparse
import getpass
import sys


def setup_databases():
    """Create the schema for every SQL provider of the marketplace domain."""
    from marketplace.domain import marketplace
    from marketplace.utils.db import setup_db

    print("Initializing marketplace domain...")
    marketplace.init()
    print("Creating database schema...")
    touched = setup_db(marketplace)
    if not touched:
        print("  No SQL provider configured; nothing to create.")
    for name in touched:
        print(f"  {name} schema ready.")

    print("Done.")


def drop_databases():
    """Drop the schema created by :func:`setup_databases`."""
    from marketplace.domain import marketplace
    from marketplace.utils.db import drop_db

    print("Initializing marketplace domain...")
    marketplace.init()
    print("Dropping database schema...")
    for name in drop_db(marketplace):
        print(f"  {name} schema dropped.")

    print("Done.")


def register_admin(name, email, password):
    """Add an administrator to the active domain. Returns the new ``User``."""
    from protean.exceptions import ValidationError
    from protean.utils.globals import current_domain

    from marketplace.identity.lookup import find_account_by_email
    from marketplace.identity.passwords import prepare_password
    from marketplace.identity.user import Role, User

    password_hash = prepare_password(password)
    if find_account_by_email(email) is not None:
        raise ValidationError({"email": ["Email is already registered"]})

    admin = User.register(name=name, email=email, password_hash=password_hash, role=Role.ADMIN.value)
    current_domain.repository_for(User).add(admin)
    return admin


def create_admin(name, email, password=None):
    """Register an administrator account from the command line. Returns the new user id."""
    from marketplace.domain import marketplace

    marketplace.init()
    password = password or getpass.getpass("Password: ")

    with marketplace.domain_context():
        admin = register_admin(name, email, password)

    print(f"Administrator {admin.email} created ({admin.id}).")
    return admin.id


def main():
    parser = argparse.ArgumentParser(description="WelwExpress management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    admin_parser = subparsers.add_parser("create-admin", help="Register an administrator")
    admin_parser.add_argument("--name", required=True)
    admin_parser.add_argument("--email", required=True)
    admin_parser.add_argument("--password", help="Prompted for when omitted")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_databases()
    elif args.command == "drop-db":
        drop_databases()
    elif args.command == "create-admin":
        create_admin(args.name, args.email, args.password)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
