from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from config import Settings
from database.booking_store import BookingStore
from database.user_store import UserStore


def create_client(settings: Settings) -> AsyncIOMotorClient:
    return AsyncIOMotorClient(settings.MONGODB_URL)


def get_database(request: Request) -> AsyncIOMotorDatabase:
    return request.app.mongodb


def get_booking_store(request: Request) -> BookingStore:
    return BookingStore(get_database(request)["bookings"])


def get_user_store(request: Request) -> UserStore:
    return UserStore(get_database(request)["users"])
