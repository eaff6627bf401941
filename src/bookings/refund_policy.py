"""
Refund policy for cancelled bookings.

The refund depends only on how long before departure the cancellation
happens:

- more than 24 hours: full refund
- more than 12 hours, up to 24: half refund
- 12 hours or less (including after departure): no refund

Amounts are truncated to whole cents, never rounded up.
"""

from datetime import datetime
from decimal import Decimal, ROUND_DOWN
from typing import Optional

from src.utils import as_utc, utcnow

FULL_REFUND_HOURS = 24
HALF_REFUND_HOURS = 12

CENTS = Decimal("0.01")

def hours_until_departure(departure_time: datetime, now: Optional[datetime] = None) -> float:
    now = as_utc(now) if now is not None else utcnow()
    return (as_utc(departure_time) - now).total_seconds() / 3600

def refund_fraction(hours: float) -> Decimal:
    if hours > FULL_REFUND_HOURS:
        return Decimal("1")
    if hours > HALF_REFUND_HOURS:
        return Decimal("0.5")
    return Decimal("0")

def calculate_refund(
    total_amount: Decimal,
    departure_time: datetime,
    now: Optional[datetime] = None
) -> Decimal:
    """Refund owed for a booking of `total_amount` cancelled at `now`"""
    fraction = refund_fraction(hours_until_departure(departure_time, now))
    return (Decimal(str(total_amount)) * fraction).quantize(CENTS, rounding=ROUND_DOWN)
