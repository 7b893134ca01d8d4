"""Shared test fixtures and helpers."""

from datetime import datetime
from typing import Optional

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from travelhub.config.database import db_config, Collections
from travelhub.utils.auth import create_access_token
from tests.fake_mongo import FakeDatabase

OWNER_ID = "user_owner_1"
CUSTOMER_ID = "user_customer_1"


@pytest.fixture
def fake_db(monkeypatch):
    """Route every db_ops call to an in-memory database"""
    database = FakeDatabase()
    monkeypatch.setattr(db_config, "database", database)
    return database


@pytest.fixture
def client(fake_db):
    # No context manager: the lifespan would try to reach a real MongoDB
    from travelhub.main import app
    return TestClient(app)


def _stamped(doc: dict) -> dict:
    now = datetime.utcnow()
    doc.setdefault("created_at", now)
    doc.setdefault("updated_at", now)
    return doc


def auth_headers(user_id: str) -> dict:
    return {"Authorization": f"Bearer {create_access_token({'sub': user_id})}"}


def seed_user(db: FakeDatabase, user_id: str = CUSTOMER_ID, email: str = "sam@example.com",
              name: Optional[str] = "Sam T") -> dict:
    return db[Collections.USERS].seed(_stamped(
        {"user_id": user_id, "email": email, "name": name, "role": "customer"}
    ))


def seed_customer(db: FakeDatabase, user_id: str = CUSTOMER_ID, **fields) -> dict:
    doc = {
        "owner_user_id": user_id,
        "first_name": "Sam",
        "last_name": "Traveler",
        "phone": "+15550100",
        "total_bookings": 0,
        "total_spent": 0,
    }
    doc.update(fields)
    return db[Collections.CUSTOMERS].seed(_stamped(doc))


def seed_agency(db: FakeDatabase, owner_id: str = OWNER_ID, **fields) -> dict:
    doc = {
        "owner_user_id": owner_id,
        "agency_name": "Horizon Travels",
        "description": "Island hopping",
        "category": "Beach Holidays",
        "email": "owner@horizon.travel",
        "phone": "+15550199",
        "address": {"city": "Lisbon", "state": "Lisboa"},
    }
    doc.update(fields)
    return db[Collections.AGENCIES].seed(_stamped(doc))


def seed_package(db: FakeDatabase, agency: dict, **fields) -> dict:
    doc = {
        "agency_id": str(agency["_id"]),
        "package_name": "Azores Escape",
        "destination": "Azores",
        "duration_days": 5,
        "price": 500.0,
        "category": "Adventure",
        "promo_code": None,
        "promo_discount": 0,
        "promo_code_active": False,
        "is_active": True,
    }
    doc.update(fields)
    return db[Collections.PACKAGES].seed(_stamped(doc))


def seed_reservation(db: FakeDatabase, agency: dict, package: dict, **fields) -> dict:
    doc = {
        "_id": ObjectId(),
        "kind": "slot",
        "business_id": str(agency["_id"]),
        "service_id": str(package["_id"]),
        "customer_user_id": CUSTOMER_ID,
        "appointment_date": "2026-11-02",
        "start_time": "10:00",
        "end_time": "11:00",
        "base_price": 40.0,
        "subtotal": 40.0,
        "discount": 0.0,
        "total_price": 40.0,
        "notes": "",
        "status": "confirmed",
        "payment_status": "pending",
        "customer_name": "Sam Traveler",
        "customer_email": "sam@example.com",
        "customer_phone": "+15550100",
    }
    doc.update(fields)
    return db[Collections.RESERVATIONS].seed(_stamped(doc))


@pytest.fixture
def catalog(fake_db):
    """A customer with a profile, an agency, a travel package and a 60 minute slot service"""
    user = seed_user(fake_db)
    customer = seed_customer(fake_db)
    agency = seed_agency(fake_db)
    travel = seed_package(fake_db, agency, promo_code="SAVE20", promo_discount=20, promo_code_active=True)
    slot = seed_package(
        fake_db, agency, package_name="Trip Planning Session", price=40.0, duration_minutes=60
    )
    return {"user": user, "customer": customer, "agency": agency, "travel": travel, "slot": slot}
