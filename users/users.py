import logging

from fastapi import APIRouter, HTTPException, Depends
from pymongo.errors import PyMongoError

from models.user import UserLogin, LoginResponse
from auth.jwt_handler import create_access_token
from auth.password_handler import verify_password
from config import Settings, get_app_settings
from database.connection import get_user_store
from database.user_store import UserStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["users"])


@router.post("/login", response_model=LoginResponse)
async def login_user(
    user_credentials: UserLogin,
    users: UserStore = Depends(get_user_store),
    settings: Settings = Depends(get_app_settings),
):
    if not user_credentials.username or not user_credentials.password:
        raise HTTPException(status_code=400, detail="Username and password required")
    try:
        user = await users.find_by_username(user_credentials.username)
    except PyMongoError:
        logger.exception("Login lookup failed for %s", user_credentials.username)
        raise HTTPException(status_code=500, detail="Server error during login")
    if not user or not verify_password(user_credentials.password, user["passwordHash"]):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    token = create_access_token(
        data={"sub": user["id"], "username": user["username"], "role": user["role"]},
        settings=settings,
    )
    logger.info("User %s logged in", user["username"])
    return {"token": token, "role": user["role"], "username": user["username"]}
