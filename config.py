# config.py

from decimal import Decimal
from functools import lru_cache
from typing import Dict, List, Optional

from fastapi import Request
from pydantic_settings import BaseSettings, SettingsConfigDict

from pricing.pricing import PricingConfig


class Settings(BaseSettings):
    MONGODB_URL: str = "mongodb://localhost:27017"
    DATABASE_NAME: str = "hotel-booking"

    JWT_SECRET: str = "your-secret-key-here"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 480  # 8 hours

    FRONTEND_URL: Optional[str] = None
    ALLOWED_ORIGINS: List[str] = [
        "https://enlivenresidency.com",
        "https://www.enlivenresidency.com",
        "http://localhost:5173",
    ]

    PROPERTY_PRICES: Dict[str, Decimal] = {
        "Patia": Decimal("1200"),
        "Niladri": Decimal("1500"),
    }
    DEFAULT_NIGHTLY_RATE: Decimal = Decimal("1200")
    SURCHARGE_RATE: Decimal = Decimal("0.12")

    SMTP_USER: Optional[str] = None
    SMTP_PASS: Optional[str] = None
    SMTP_SERVER: str = "smtp.gmail.com"
    SMTP_PORT: int = 587
    OWNER_EMAIL: Optional[str] = None
    HOTEL_NAME: str = "Hotel Enliven"

    PORT: int = 5000
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    def cors_origins(self) -> List[str]:
        origins = list(self.ALLOWED_ORIGINS)
        if self.FRONTEND_URL and self.FRONTEND_URL not in origins:
            origins.insert(0, self.FRONTEND_URL)
        return origins

    def pricing(self) -> PricingConfig:
        return PricingConfig(
            prices=self.PROPERTY_PRICES,
            default_rate=self.DEFAULT_NIGHTLY_RATE,
            surcharge_rate=self.SURCHARGE_RATE,
        )

    @property
    def mail_configured(self) -> bool:
        return bool(self.SMTP_USER and self.SMTP_PASS and self.OWNER_EMAIL)


@lru_cache
def get_settings() -> Settings:
    return Settings()


def get_app_settings(request: Request) -> Settings:
    """Dependency returning the settings the running app was built with."""
    return request.app.state.settings
