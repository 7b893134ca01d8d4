"""
Helper utility functions
"""
import math
from datetime import datetime
from typing import Dict, List, Optional

import pytz
from bson import ObjectId

from travelhub.config.settings import settings

DISPLAY_TZ = pytz.timezone(settings.DISPLAY_TIMEZONE)


def serialize_doc(doc: Optional[Dict]) -> Optional[Dict]:
    """Convert MongoDB document to JSON-serializable format"""
    if doc is None:
        return None

    for key, value in doc.items():
        if isinstance(value, ObjectId):
            doc[key] = str(value)
        elif isinstance(value, datetime):
            # Naive datetimes from the DB are UTC
            if value.tzinfo is None:
                value = pytz.utc.localize(value)
            doc[key] = value.astimezone(DISPLAY_TZ).isoformat()
        elif isinstance(value, list):
            doc[key] = [serialize_doc(item) if isinstance(item, dict) else item for item in value]
        elif isinstance(value, dict):
            doc[key] = serialize_doc(value)

    return doc


def serialize_docs(docs: List[Dict]) -> List[Dict]:
    """Convert list of MongoDB documents to JSON-serializable format"""
    return [serialize_doc(doc) for doc in docs]


def page_window(page: int, limit: int) -> Dict[str, int]:
    """skip/limit for a 1-based page"""
    page = max(page, 1)
    limit = max(min(limit, settings.MAX_PAGE_SIZE), 1)
    return {"skip": (page - 1) * limit, "limit": limit}


def pagination(page: int, limit: int, total: int) -> Dict[str, int]:
    """Pagination block returned with list endpoints"""
    limit = max(min(limit, settings.MAX_PAGE_SIZE), 1)
    return {
        "current": max(page, 1),
        "pages": math.ceil(total / limit),
        "total": total,
    }


def display_name(first_name: Optional[str], last_name: Optional[str]) -> str:
    """First and last name joined by one space, trimmed"""
    return f"{first_name or ''} {last_name or ''}".strip()
