"""Demo accounts and catalogue.

Seeding is idempotent: roles, users and categories are only added when
missing, and products only when the catalogue is empty.
"""
import structlog

from .config import ROLE_ADMIN, ROLE_USER
from .infrastructure.repositories import (
    RoleRepository, UserRepository, CategoryRepository, ProductRepository
)

logger = structlog.get_logger(__name__)

DEMO_USERS = [
    # (name, password, role)
    ("admin", "AdminPassword1", ROLE_ADMIN),
    ("one", "UserPassword1", ROLE_USER),
    ("two", "UserPassword2", ROLE_USER),
]

DEMO_CATEGORIES = ["stocks", "crypto", "commodities"]

DEMO_PRODUCTS = [
    # (name, description, price, quantity, category)
    ("ORCL", "Oracle Corporation", 55.9, 2000, "stocks"),
    ("ETH", "Ethereum", 2400.0, 150, "crypto"),
    ("BTC", "Bitcoin", 41000.0, 3, "crypto"),
    ("XRP", "Ripple", 0.6, 1800, "crypto"),
    ("ORCL", "Oracle Corporation futures", 60.0, 500, "commodities"),
    ("ETH", "Ethereum futures", 150.0, 40, "commodities"),
    ("GOLD", "Gold ounce", 1800.0, 5000, "commodities"),
]


def seed_demo(db) -> dict:
    """Insert demo roles, users, categories and products.

    Returns:
        Counts of inserted records by kind
    """
    roles = RoleRepository(db)
    users = UserRepository(db)
    categories = CategoryRepository(db)
    products = ProductRepository(db)
    inserted = {"roles": 0, "users": 0, "categories": 0, "products": 0}

    for role_name in (ROLE_ADMIN, ROLE_USER):
        if not roles.get_by_name(role_name):
            roles.create(role_name)
            inserted["roles"] += 1

    for name, password, role_name in DEMO_USERS:
        if not users.get_by_name(name):
            users.create(name, password, roles.get_by_name(role_name)["id"])
            inserted["users"] += 1

    for category_name in DEMO_CATEGORIES:
        if not categories.get_by_name(category_name):
            categories.create(category_name)
            inserted["categories"] += 1

    if not products.list_all():
        for name, description, price, quantity, category_name in DEMO_PRODUCTS:
            products.create(
                name=name,
                description=description,
                price=price,
                quantity=quantity,
                category_id=categories.get_by_name(category_name)["id"]
            )
            inserted["products"] += 1

    logger.info("demo_data_seeded", **inserted)
    return inserted
