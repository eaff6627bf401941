from pydantic import Field, validator
from typing import List, Optional
from datetime import datetime
from enum import Enum

from src.schemas import CamelModel, Money
from src.utils import as_utc
from src.auth.schemas import UserSummary
from src.buses.schemas import Bus

class BookingStatus(str, Enum):
    """Booking status enumeration"""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"
    
    @property
    def is_terminal(self) -> bool:
        return self in (BookingStatus.CANCELLED, BookingStatus.COMPLETED)

class PaymentStatus(str, Enum):
    """Payment status enumeration"""
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"

class PaymentMethod(str, Enum):
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    CASH = "cash"

class RefundStatus(str, Enum):
    """Refund status enumeration"""
    NONE = "none"
    REQUESTED = "requested"
    APPROVED = "approved"
    REJECTED = "rejected"

# Booking Request Models
class BookingCreate(CamelModel):
    """Request to book seats on a bus"""
    bus_id: str = Field(..., min_length=1)
    seats: List[str]
    payment_method: PaymentMethod
    
    @validator("seats", pre=True)
    def coerce_seat_ids(cls, v):
        # Seat numbers from the seat map arrive as ints, seat codes as strings
        if isinstance(v, list):
            return [str(seat).strip() if isinstance(seat, (int, str)) else seat for seat in v]
        return v
    
    @validator("seats")
    def validate_seats(cls, v):
        if not v:
            raise ValueError("At least one seat is required")
        if any(not seat for seat in v):
            raise ValueError("Seat numbers are required")
        if len(set(v)) != len(v):
            raise ValueError("Duplicate seat numbers in booking")
        return v

# Booking Response Models
class Booking(CamelModel):
    """Booking details"""
    id: str
    booking_reference: str
    user_id: str
    bus_id: str
    seats: List[str]
    total_amount: Money
    status: BookingStatus
    payment_status: PaymentStatus
    payment_method: PaymentMethod
    booking_date: datetime
    refund_status: RefundStatus
    refund_amount: Money
    created_at: datetime
    updated_at: datetime
    bus: Optional[Bus] = None
    user: Optional[UserSummary] = None
    
    @validator("booking_date", "created_at", "updated_at")
    def normalize_timestamps(cls, v):
        return as_utc(v)

class BookingCancellation(CamelModel):
    booking: Booking
    refund_amount: Money
