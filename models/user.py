from enum import Enum
from pydantic import BaseModel
from typing import Optional


class Role(str, Enum):
    ADMIN = "admin"
    MANAGER = "manager"


class Identity(BaseModel):
    id: str
    username: str
    role: Role


class UserLogin(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class LoginResponse(BaseModel):
    token: str
    role: Role
    username: str


class User(BaseModel):
    id: Optional[str] = None
    username: str
    passwordHash: str
    role: Role
