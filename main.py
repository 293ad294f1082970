# main.py

import logging
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from config import Settings, get_settings
from database.connection import create_client
from database.user_store import UserStore
from notifications.notifications import BookingNotifier

# Import routers
from users.users import router as users_router
from bookings.bookings import router as bookings_router

load_dotenv()

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.mongodb_client = create_client(settings)
        app.mongodb = app.mongodb_client[settings.DATABASE_NAME]
        await UserStore(app.mongodb["users"]).ensure_indexes()
        logger.info("MongoDB connected to database %s", settings.DATABASE_NAME)
        yield
        app.mongodb_client.close()

    app = FastAPI(title="Hotel Booking API", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.notifier = BookingNotifier(settings)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/", response_class=PlainTextResponse)
    async def health_check():
        return "Hotel Booking Backend API is running."

    # Include all routers
    app.include_router(users_router)
    app.include_router(bookings_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=app.state.settings.PORT)
