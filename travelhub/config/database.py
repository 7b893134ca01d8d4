"""
Database configuration and connection management for MongoDB
"""
import logging
import os
from typing import Optional

from dotenv import load_dotenv
from motor.motor_asyncio import AsyncIOMotorClient

load_dotenv()

logger = logging.getLogger(__name__)


class DatabaseConfig:
    """MongoDB database configuration"""

    def __init__(self):
        self.MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017")
        self.DATABASE_NAME = os.getenv("DATABASE_NAME", "travelhub_db")
        self.client: Optional[AsyncIOMotorClient] = None
        self.database = None

    async def connect_db(self):
        """Connect to MongoDB"""
        try:
            self.client = AsyncIOMotorClient(self.MONGO_URI)
            self.database = self.client[self.DATABASE_NAME]
            # Test connection
            await self.client.admin.command("ping")
            logger.info("Connected to MongoDB: %s", self.DATABASE_NAME)
        except Exception:
            logger.exception("Error connecting to MongoDB at %s", self.MONGO_URI)
            raise

    async def ensure_indexes(self):
        """Create the indexes the booking queries rely on"""
        reservations = self.get_collection(Collections.RESERVATIONS)
        await reservations.create_index([("business_id", 1), ("appointment_date", 1)])
        await reservations.create_index([("business_id", 1), ("status", 1)])
        await reservations.create_index([("customer_user_id", 1), ("appointment_date", 1)])
        await self.get_collection(Collections.USERS).create_index("user_id", unique=True)
        await self.get_collection(Collections.CUSTOMERS).create_index("owner_user_id", unique=True)
        await self.get_collection(Collections.AGENCIES).create_index("owner_user_id", unique=True)
        await self.get_collection(Collections.PACKAGES).create_index("agency_id")

    async def close_db(self):
        """Close MongoDB connection"""
        if self.client:
            self.client.close()
            logger.info("MongoDB connection closed")

    def get_collection(self, collection_name: str):
        """Get a specific collection"""
        if self.database is None:
            raise RuntimeError("Database not connected")
        return self.database[collection_name]


# Global database instance
db_config = DatabaseConfig()


# Collection names
class Collections:
    USERS = "users"
    CUSTOMERS = "customers"
    AGENCIES = "agencies"
    PACKAGES = "packages"
    RESERVATIONS = "reservations"
    # One document per (agency, date) holding claimed time ranges
    SLOT_LEDGER = "slot_ledger"
