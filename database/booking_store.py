# database/booking_store.py

from typing import Any, Dict, List, Optional

from bson import ObjectId
from pymongo import ReturnDocument


class InvalidBookingId(ValueError):
    pass


def to_object_id(booking_id: str) -> ObjectId:
    if not ObjectId.is_valid(booking_id):
        raise InvalidBookingId(booking_id)
    return ObjectId(booking_id)


def serialize(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Convert the Mongo `_id` to a string for JSON responses."""
    if doc is not None:
        doc["_id"] = str(doc["_id"])
    return doc


class BookingStore:
    """Booking persistence on top of a Motor collection."""

    def __init__(self, collection):
        self.collection = collection

    async def create(self, booking_doc: Dict[str, Any]) -> str:
        result = await self.collection.insert_one(booking_doc)
        return str(result.inserted_id)

    async def find_by_id(self, booking_id: str) -> Optional[Dict[str, Any]]:
        doc = await self.collection.find_one({"_id": to_object_id(booking_id)})
        return serialize(doc)

    async def find_all(self) -> List[Dict[str, Any]]:
        cursor = self.collection.find().sort("createdAt", -1)
        return [serialize(doc) for doc in await cursor.to_list(length=None)]

    async def update_by_id(self, booking_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        object_id = to_object_id(booking_id)
        if not fields:
            return serialize(await self.collection.find_one({"_id": object_id}))
        result = await self.collection.find_one_and_update(
            {"_id": object_id},
            {"$set": fields},
            return_document=ReturnDocument.AFTER
        )
        return serialize(result)

    async def delete_by_id(self, booking_id: str) -> bool:
        result = await self.collection.delete_one({"_id": to_object_id(booking_id)})
        return result.deleted_count == 1
