import asyncio
import logging
import os
import sys

# Ensure usage of the current directory for imports
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from travelhub.config.database import db_config, Collections
from travelhub.config.settings import configure_logging
from travelhub.database.db_operations import db_ops
from travelhub.utils.auth import create_access_token

logger = logging.getLogger("seed_data")

OWNER_ID = "user_demo_owner"
CUSTOMER_ID = "user_demo_customer"


async def get_or_create(collection: str, lookup: dict, data: dict) -> str:
    existing = await db_ops.get_one(collection, lookup)
    if existing:
        logger.info("Already exists in %s: %s", collection, lookup)
        return str(existing["_id"])
    created = await db_ops.create(collection, {**lookup, **data})
    logger.info("Created in %s: %s", collection, lookup)
    return str(created["_id"])


async def seed_data():
    logger.info("Starting database seeding...")
    await db_config.connect_db()
    try:
        # 1. Users
        await get_or_create(Collections.USERS, {"user_id": OWNER_ID},
                            {"email": "owner@horizon.travel", "name": "Horizon Owner", "role": "business"})
        await get_or_create(Collections.USERS, {"user_id": CUSTOMER_ID},
                            {"email": "sam@example.com", "name": "Sam Traveler", "role": "customer"})

        # 2. Customer profile
        await get_or_create(Collections.CUSTOMERS, {"owner_user_id": CUSTOMER_ID}, {
            "first_name": "Sam",
            "last_name": "Traveler",
            "phone": "+15550100",
            "total_bookings": 0,
            "total_spent": 0,
            "is_active": True,
        })

        # 3. Agency
        agency_id = await get_or_create(Collections.AGENCIES, {"owner_user_id": OWNER_ID}, {
            "agency_name": "Horizon Travels",
            "description": "Island hopping and city breaks",
            "category": "Beach Holidays",
            "email": "owner@horizon.travel",
            "phone": "+15550199",
            "address": {"city": "Lisbon", "country": "Portugal"},
            "specializations": ["Islands", "Food"],
        })

        # 4. Packages: one multi-day trip with a promo, one slot-based consultation
        await get_or_create(Collections.PACKAGES, {"agency_id": agency_id, "package_name": "Azores Escape"}, {
            "destination": "Azores",
            "description": "Five days of hiking and hot springs",
            "duration_days": 5,
            "price": 500.0,
            "category": "Adventure",
            "promo_code": "SAVE20",
            "promo_discount": 20,
            "promo_code_active": True,
            "is_active": True,
        })
        await get_or_create(Collections.PACKAGES, {"agency_id": agency_id, "package_name": "Trip Planning Session"}, {
            "destination": "Lisbon office",
            "duration_days": 1,
            "duration_minutes": 60,
            "price": 40.0,
            "category": "City Break",
            "is_active": True,
        })

        logger.info("Owner token: %s", create_access_token({"sub": OWNER_ID, "email": "owner@horizon.travel"}))
        logger.info("Customer token: %s", create_access_token({"sub": CUSTOMER_ID, "email": "sam@example.com"}))
        logger.info("Seeding complete")
    finally:
        await db_config.close_db()


if __name__ == "__main__":
    configure_logging()
    asyncio.run(seed_data())
