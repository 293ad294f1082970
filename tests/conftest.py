import copy
from datetime import timedelta

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from auth.jwt_handler import create_access_token
from auth.password_handler import hash_password
from bookings.validation import utc_today
from config import Settings
from database.booking_store import to_object_id
from database.connection import get_booking_store, get_user_store
from main import create_app
from models.user import Role


class InMemoryBookingStore:
    """Same contract as database.booking_store.BookingStore, kept in a dict."""

    def __init__(self):
        self.docs = {}

    async def create(self, booking_doc):
        booking_doc["_id"] = ObjectId()
        self.docs[booking_doc["_id"]] = copy.deepcopy(booking_doc)
        return str(booking_doc["_id"])

    def _out(self, doc):
        doc = copy.deepcopy(doc)
        doc["_id"] = str(doc["_id"])
        return doc

    async def find_by_id(self, booking_id):
        doc = self.docs.get(to_object_id(booking_id))
        return self._out(doc) if doc else None

    async def find_all(self):
        # insertion order breaks createdAt ties
        ordered = sorted(enumerate(self.docs.values()), key=lambda item: (item[1]["createdAt"], item[0]), reverse=True)
        return [self._out(doc) for _, doc in ordered]

    async def update_by_id(self, booking_id, fields):
        doc = self.docs.get(to_object_id(booking_id))
        if doc is None:
            return None
        doc.update(copy.deepcopy(fields))
        return self._out(doc)

    async def delete_by_id(self, booking_id):
        return self.docs.pop(to_object_id(booking_id), None) is not None


class InMemoryUserStore:
    def __init__(self):
        self.users = {}

    async def find_by_username(self, username):
        user = self.users.get(username)
        return dict(user) if user else None

    async def create(self, username, password, role):
        user_id = str(ObjectId())
        self.users[username] = {
            "_id": user_id,
            "id": user_id,
            "username": username,
            "passwordHash": hash_password(password),
            "role": Role(role).value,
        }
        return user_id


class RecordingNotifier:
    def __init__(self):
        self.sent = []

    async def notify(self, booking):
        self.sent.append(booking)


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        JWT_SECRET="test-secret",
        SMTP_USER=None,
        SMTP_PASS=None,
        OWNER_EMAIL=None,
    )


@pytest.fixture
def booking_store():
    return InMemoryBookingStore()


@pytest.fixture
def user_store():
    return InMemoryUserStore()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def app(settings, booking_store, user_store, notifier):
    app = create_app(settings)
    app.state.notifier = notifier
    app.dependency_overrides[get_booking_store] = lambda: booking_store
    app.dependency_overrides[get_user_store] = lambda: user_store
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


def auth_header(settings, role, username="staff"):
    token = create_access_token({"sub": str(ObjectId()), "username": username, "role": role.value}, settings)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(settings):
    return auth_header(settings, Role.ADMIN, "admin")


@pytest.fixture
def manager_headers(settings):
    return auth_header(settings, Role.MANAGER, "manager")


@pytest.fixture
def valid_payload():
    today = utc_today()
    return {
        "name": "Jane Doe",
        "phone": "98-7654-3210",
        "location": "Niladri",
        "checkin": today.isoformat(),
        "checkout": (today + timedelta(days=2)).isoformat(),
        "adults": 2,
        "rooms": 1,
    }
