"""
Database operations - Generic CRUD functions for all collections
"""
import logging
from typing import List, Dict, Optional, Any, Tuple
from datetime import datetime

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from travelhub.config.database import db_config, Collections

logger = logging.getLogger(__name__)


def to_object_id(doc_id: Any) -> Optional[ObjectId]:
    """Coerce a string id to ObjectId, None when it is not a valid id"""
    if isinstance(doc_id, ObjectId):
        return doc_id
    try:
        return ObjectId(doc_id)
    except (InvalidId, TypeError):
        return None


def slot_ledger_key(business_id: str, day: str) -> str:
    return f"{business_id}:{day}"


class DBOperations:
    """Generic database operations for MongoDB collections"""

    @staticmethod
    async def get_all(
        collection_name: str,
        filter_query: Dict = None,
        skip: int = 0,
        limit: int = 100,
        sort: List[Tuple[str, int]] = None,
    ) -> List[Dict]:
        """Get all documents from a collection with optional filtering"""
        collection = db_config.get_collection(collection_name)
        filter_query = filter_query or {}
        cursor = collection.find(filter_query)
        if sort:
            cursor = cursor.sort(sort)
        cursor = cursor.skip(skip).limit(limit)
        documents = await cursor.to_list(length=limit)
        return documents

    @staticmethod
    async def get_by_id(collection_name: str, doc_id: str) -> Optional[Dict]:
        """Get a single document by ID"""
        oid = to_object_id(doc_id)
        if oid is None:
            return None
        collection = db_config.get_collection(collection_name)
        return await collection.find_one({"_id": oid})

    @staticmethod
    async def get_one(collection_name: str, filter_query: Dict) -> Optional[Dict]:
        """Get a single document by filter query"""
        collection = db_config.get_collection(collection_name)
        document = await collection.find_one(filter_query)
        return document

    @staticmethod
    async def create(collection_name: str, document: Dict) -> Dict:
        """Create a new document (a preassigned _id is kept)"""
        collection = db_config.get_collection(collection_name)
        now = datetime.utcnow()
        document["created_at"] = now
        document["updated_at"] = now
        result = await collection.insert_one(document)
        document["_id"] = result.inserted_id
        return document

    @staticmethod
    async def update(collection_name: str, doc_id: str, update_data: Dict) -> Optional[Dict]:
        """Update a document by ID"""
        oid = to_object_id(doc_id)
        if oid is None:
            return None
        return await DBOperations.update_one(collection_name, {"_id": oid}, update_data)

    @staticmethod
    async def update_one(collection_name: str, filter_query: Dict, update_data: Dict) -> Optional[Dict]:
        """Atomically $set fields on the first document matching the filter.

        Returns the updated document, or None when nothing matched. Callers
        put preconditions (owner, current status) in the filter.
        """
        collection = db_config.get_collection(collection_name)
        update_data["updated_at"] = datetime.utcnow()
        return await collection.find_one_and_update(
            filter_query,
            {"$set": update_data},
            return_document=ReturnDocument.AFTER,
        )

    @staticmethod
    async def upsert(collection_name: str, filter_query: Dict, update_data: Dict) -> Dict:
        """Update the matching document or create it"""
        collection = db_config.get_collection(collection_name)
        now = datetime.utcnow()
        update_data["updated_at"] = now
        return await collection.find_one_and_update(
            filter_query,
            {"$set": update_data, "$setOnInsert": {"created_at": now}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )

    @staticmethod
    async def increment(collection_name: str, filter_query: Dict, inc: Dict, set_data: Dict = None) -> bool:
        """Atomic $inc (plus optional $set) on the first matching document"""
        collection = db_config.get_collection(collection_name)
        update = {"$inc": inc}
        if set_data:
            update["$set"] = set_data
        result = await collection.update_one(filter_query, update)
        return result.matched_count > 0

    @staticmethod
    async def delete(collection_name: str, doc_id: str) -> bool:
        """Delete a document by ID"""
        oid = to_object_id(doc_id)
        if oid is None:
            return False
        collection = db_config.get_collection(collection_name)
        result = await collection.delete_one({"_id": oid})
        return result.deleted_count > 0

    @staticmethod
    async def delete_one(collection_name: str, filter_query: Dict) -> bool:
        collection = db_config.get_collection(collection_name)
        result = await collection.delete_one(filter_query)
        return result.deleted_count > 0

    @staticmethod
    async def count(collection_name: str, filter_query: Dict = None) -> int:
        """Count documents in a collection"""
        collection = db_config.get_collection(collection_name)
        filter_query = filter_query or {}
        count = await collection.count_documents(filter_query)
        return count

    # ─── Slot ledger ──────────────────────────────────────────────────────────

    @staticmethod
    async def claim_slot(business_id: str, day: str, start: str, end: str, reservation_id: str) -> bool:
        """Atomically claim [start, end) on an agency's day.

        The filter only matches a ledger document holding no overlapping
        range, so check and claim happen in one server-side update. An upsert
        that loses the insert race (or hits an existing, conflicting document)
        raises DuplicateKeyError; that is retried once and then reported as
        not claimed.
        """
        collection = db_config.get_collection(Collections.SLOT_LEDGER)
        key = slot_ledger_key(business_id, day)
        filter_query = {
            "_id": key,
            "slots": {"$not": {"$elemMatch": {"start": {"$lt": end}, "end": {"$gt": start}}}},
        }
        update = {
            "$push": {"slots": {"start": start, "end": end, "reservation_id": reservation_id}},
            "$setOnInsert": {"business_id": business_id, "date": day},
        }
        for attempt in range(2):
            try:
                await collection.find_one_and_update(filter_query, update, upsert=True)
                return True
            except DuplicateKeyError:
                logger.debug("Slot claim collided for %s (attempt %d)", key, attempt + 1)
        return False

    @staticmethod
    async def release_slot(business_id: str, day: str, reservation_id: str) -> None:
        """Drop a reservation's range from the agency's day ledger"""
        collection = db_config.get_collection(Collections.SLOT_LEDGER)
        await collection.update_one(
            {"_id": slot_ledger_key(business_id, day)},
            {"$pull": {"slots": {"reservation_id": reservation_id}}},
        )


db_ops = DBOperations()
