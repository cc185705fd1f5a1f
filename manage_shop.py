#!/usr/bin/env python3
"""
Administration CLI for Broker Shop.
Run this script to set up the database and manage accounts.

Usage:
    python manage_shop.py init
    python manage_shop.py seed
    python manage_shop.py add <username> <password> [role]
    python manage_shop.py list
    python manage_shop.py delete <username>
    python manage_shop.py passwd <username> <new_password>
    python manage_shop.py role <username> <role>
    python manage_shop.py serve [port]
"""

import sqlite3
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from brokershop.config import MAX_PASSWORD_BYTES, ROLE_USER
from brokershop.database import create_connection, init_db
from brokershop.demo import seed_demo
from brokershop.infrastructure.repositories import RoleRepository, UserRepository
from brokershop.infrastructure.repositories.user_repository import password_fits
from brokershop.log import configure_logging


def print_usage():
    print(__doc__)


def cmd_init(db, args):
    print("Database schema is up to date")
    return 0


def cmd_seed(db, args):
    inserted = seed_demo(db)
    summary = ", ".join(f"{count} {kind}" for kind, count in inserted.items())
    print(f"Seeded demo data: {summary}")
    return 0


def cmd_add(db, args):
    if len(args) < 2:
        print("Error: add requires <username> <password> [role]")
        print("Example: python manage_shop.py add admin mypassword ROLE_ADMIN")
        return 1

    username, password = args[0], args[1]
    role_name = args[2].upper() if len(args) > 2 else ROLE_USER

    if len(password) < 4 or not password_fits(password):
        print(f"Error: Password must be 4 to {MAX_PASSWORD_BYTES} bytes")
        return 1

    users = UserRepository(db)
    if users.get_by_name(username):
        print(f"Error: User '{username}' already exists")
        return 1

    role = RoleRepository(db).get_by_name(role_name)
    if not role:
        print(f"Error: Role '{role_name}' not found")
        return 1

    try:
        user_id = users.create(username, password, role["id"])
    except sqlite3.IntegrityError as e:
        print(f"Error creating user: {e}")
        return 1

    print(f"User '{username}' created with {role_name} (ID: {user_id})")
    return 0


def cmd_list(db, args):
    users = UserRepository(db).list_all()
    if not users:
        print("No users found. Create one with: python manage_shop.py add <username> <password> [role]")
        return 0

    print(f"{'ID':<5} {'Username':<20} {'Role':<20} {'Created'}")
    print("-" * 70)
    for user in users:
        print(f"{user['id']:<5} {user['name']:<20} {user['role_name']:<20} {user['created_at']}")
    return 0


def cmd_delete(db, args):
    if len(args) < 1:
        print("Error: delete requires <username>")
        return 1

    username = args[0]
    users = UserRepository(db)
    user = users.get_by_name(username)

    if not user:
        print(f"Error: User '{username}' not found")
        return 1

    confirm = input(f"Delete user '{username}' ({user['role_name']})? [y/N]: ")
    if confirm.lower() != 'y':
        print("Cancelled")
        return 0

    users.delete(user['id'])
    print(f"User '{username}' deleted")
    return 0


def cmd_passwd(db, args):
    if len(args) < 2:
        print("Error: passwd requires <username> <new_password>")
        return 1

    username, new_password = args[0], args[1]

    if len(new_password) < 4 or not password_fits(new_password):
        print(f"Error: Password must be 4 to {MAX_PASSWORD_BYTES} bytes")
        return 1

    users = UserRepository(db)
    user = users.get_by_name(username)
    if not user:
        print(f"Error: User '{username}' not found")
        return 1

    users.update_password(user['id'], new_password)
    print(f"Password updated for '{username}'")
    return 0


def cmd_role(db, args):
    if len(args) < 2:
        print("Error: role requires <username> <role>")
        return 1

    username, role_name = args[0], args[1].upper()

    users = UserRepository(db)
    user = users.get_by_name(username)
    if not user:
        print(f"Error: User '{username}' not found")
        return 1

    role = RoleRepository(db).get_by_name(role_name)
    if not role:
        print(f"Error: Role '{role_name}' not found")
        return 1

    users.set_role(user['id'], role['id'])
    print(f"User '{username}' is now {role_name}")
    return 0


def cmd_serve(db, args):
    import uvicorn

    port = int(args[0]) if args else 8090
    db.close()
    uvicorn.run("brokershop.main:app", host="0.0.0.0", port=port)
    return 0


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        print_usage()
        return 1

    configure_logging()

    command = argv[0].lower()
    args = argv[1:]

    commands = {
        'init': cmd_init,
        'seed': cmd_seed,
        'add': cmd_add,
        'list': cmd_list,
        'delete': cmd_delete,
        'passwd': cmd_passwd,
        'role': cmd_role,
        'serve': cmd_serve,
        'help': lambda _db, _args: (print_usage(), 0)[1],
    }

    if command not in commands:
        print(f"Unknown command: {command}")
        print_usage()
        return 1

    # Initialize database
    db = create_connection()
    try:
        init_db(db)
        return commands[command](db, args)
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
