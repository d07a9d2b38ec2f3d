"""Checkout management CLI.

Usage:
    python src/manage.py setup-db        # Create all tables
    python src/manage.py drop-db         # Drop all tables
    python src/manage.py seed-products   # Load the sample catalogue
"""

import argparse
import sys


def _domain():
    from checkout.domain import checkout

    print("Initializing checkout domain...")
    checkout.init()
    return checkout


def setup_database():
    """Create database schemas for the checkout domain."""
    from checkout.utils.db import setup_db

    domain = _domain()
    print("Creating checkout database schema...")
    setup_db(domain)
    print("Done.")


def drop_database():
    """Drop database schemas for the checkout domain."""
    from checkout.utils.db import drop_db

    domain = _domain()
    print("Dropping checkout database schema...")
    drop_db(domain)
    print("Done.")


def seed_products():
    """Insert the sample catalogue unless products already exist."""
    from checkout.catalogue.management import SeedProducts
    from protean.exceptions import ValidationError

    domain = _domain()
    with domain.domain_context():
        try:
            product_ids = domain.process(SeedProducts(), asynchronous=False)
        except ValidationError as exc:
            print(f"Skipped: {exc.messages}")
            return
    print(f"Seeded {len(product_ids)} product(s).")


def main():
    parser = argparse.ArgumentParser(description="Checkout database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("seed-products", help="Load the sample product catalogue")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed-products":
        seed_products()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
