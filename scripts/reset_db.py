#!/usr/bin/env python3
"""
Farm Home Database Reset Script
Drops the livestock, farmhouse and alert collections for fresh testing
"""

import sys
import argparse

def print_success(text):
    print(f"✓ {text}")

def print_warning(text):
    print(f"⚠ {text}")

def print_error(text):
    print(f"✗ {text}")

def main(argv=None):
    parser = argparse.ArgumentParser(description='Clean the Farm Home MongoDB database')
    parser.add_argument('--all', action='store_true', help='Delete users too (DANGER!)')
    parser.add_argument('-y', '--yes', action='store_true', help='Skip confirmation')
    args = parser.parse_args(argv)

    keep_users = not args.all

    from farmhome import create_app, get_db
    from farmhome.models import reset_collections

    app = create_app()
    with app.app_context():
        database = get_db()
        print(f"\nFarm Home MongoDB reset ({database.name})\n")

        populated = {
            name: database[name].count_documents({})
            for name in sorted(database.list_collection_names())
            if not keep_users or name != 'users'
        }
        if not populated:
            print_success("Nothing to clean")
            return 0
        for name, count in populated.items():
            print(f"  {name}: {count} documents")
        if keep_users:
            print_success("Users will be preserved")
        else:
            print_warning("Users will be DELETED!")

        if not args.yes:
            confirm = input("Continue? (yes/no): ")
            if confirm.lower() != 'yes':
                print("Aborted.")
                return 1

        try:
            dropped = reset_collections(database, keep_users=keep_users)
        except Exception as e:
            print_error(f"Failed to clean MongoDB: {e}")
            return 1

    for name in dropped:
        print(f"Dropped {name}")
    print_success("Farm Home MongoDB cleaned")
    return 0

if __name__ == '__main__':
    sys.exit(main())
