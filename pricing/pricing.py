# pricing/pricing.py

import math
from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict

from pydantic import BaseModel, ConfigDict

CENTS = Decimal("0.01")
ONE_DAY = timedelta(days=1)


class PricingConfig(BaseModel):
    prices: Dict[str, Decimal]
    default_rate: Decimal = Decimal("1200")
    surcharge_rate: Decimal = Decimal("0.12")

    model_config = ConfigDict(frozen=True)


class Quote(BaseModel):
    price_per_night: Decimal
    nights: int
    base_amount: Decimal
    surcharge: Decimal
    total_amount: Decimal


def price_per_night(location: str, config: PricingConfig) -> Decimal:
    """
    Nightly rate for a property, falling back to the default rate for
    locations that are not in the price table.
    """
    return config.prices.get(location, config.default_rate)


def count_nights(checkin: datetime, checkout: datetime) -> int:
    """Whole nights between two instants; any partial day counts as a night."""
    return math.ceil((checkout - checkin) / ONE_DAY)


def round2(amount: Decimal) -> Decimal:
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def compute(location: str, checkin: datetime, checkout: datetime, rooms: int, config: PricingConfig) -> Quote:
    """
    Price a stay. Inputs are expected to have passed booking validation,
    so checkout is after checkin and rooms is at least 1.
    """
    rate = price_per_night(location, config)
    nights = count_nights(checkin, checkout)
    base = rate * nights * rooms
    surcharge = base * config.surcharge_rate
    return Quote(
        price_per_night=rate,
        nights=nights,
        base_amount=base,
        surcharge=surcharge,
        total_amount=round2(base + surcharge),
    )
