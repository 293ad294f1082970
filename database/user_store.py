from typing import Any, Dict, Optional

from pymongo.errors import DuplicateKeyError

from auth.password_handler import hash_password
from models.user import Role


class UsernameTaken(ValueError):
    pass


class UserStore:
    """Staff accounts. Users are seeded by operators, never through the public API."""

    def __init__(self, collection):
        self.collection = collection

    async def ensure_indexes(self) -> None:
        await self.collection.create_index("username", unique=True)

    async def find_by_username(self, username: str) -> Optional[Dict[str, Any]]:
        user = await self.collection.find_one({"username": username})
        if user:
            user["id"] = str(user["_id"])
        return user

    async def create(self, username: str, password: str, role: Role) -> str:
        user_doc = {
            "username": username,
            "passwordHash": hash_password(password),
            "role": Role(role).value,
        }
        try:
            result = await self.collection.insert_one(user_doc)
        except DuplicateKeyError as exc:
            raise UsernameTaken(username) from exc
        return str(result.inserted_id)
