from pydantic import Field, validator
from typing import List, Optional
from datetime import datetime, date
from enum import Enum

from src.schemas import CamelModel, Money
from src.utils import as_utc

class BusType(str, Enum):
    """Bus class enumeration"""
    HIGHWAY_BUS = "Highway Bus"
    INTERCITY = "Intercity"
    SEMI_LUXURY = "Semi Luxury"
    NORMAL_COACHES = "Normal Coaches"

class BusStatus(str, Enum):
    """Trip status enumeration"""
    SCHEDULED = "scheduled"
    DELAYED = "delayed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"

class Amenity(str, Enum):
    AC = "AC"
    WIFI = "WiFi"
    USB_CHARGING = "USB Charging"
    RECLINING_SEATS = "Reclining Seats"
    TOILET = "Toilet"
    SNACKS = "Snacks"

def _unique_amenities(v):
    if v is None:
        return v
    seen = []
    for amenity in v:
        if amenity not in seen:
            seen.append(amenity)
    return seen

class OperatorInfo(CamelModel):
    name: str = Field(..., min_length=1)
    contact: str = Field(..., min_length=1)

class BusBase(CamelModel):
    operator: OperatorInfo
    bus_type: BusType
    from_location: str = Field(..., alias="from", min_length=1)
    to_location: str = Field(..., alias="to", min_length=1)
    departure_time: datetime
    arrival_time: datetime
    price: Money = Field(..., ge=0)
    total_seats: int = Field(..., ge=1)
    status: BusStatus = BusStatus.SCHEDULED
    amenities: List[Amenity] = []
    
    @validator("departure_time", "arrival_time")
    def normalize_times(cls, v):
        return as_utc(v)
    
    @validator("amenities")
    def dedupe_amenities(cls, v):
        return _unique_amenities(v)

class BusCreate(BusBase):
    # Defaults to total_seats when omitted
    available_seats: Optional[int] = Field(None, ge=0)

class BusUpdate(CamelModel):
    operator: Optional[OperatorInfo] = None
    bus_type: Optional[BusType] = None
    from_location: Optional[str] = Field(None, alias="from", min_length=1)
    to_location: Optional[str] = Field(None, alias="to", min_length=1)
    departure_time: Optional[datetime] = None
    arrival_time: Optional[datetime] = None
    price: Optional[Money] = Field(None, ge=0)
    total_seats: Optional[int] = Field(None, ge=1)
    available_seats: Optional[int] = Field(None, ge=0)
    status: Optional[BusStatus] = None
    amenities: Optional[List[Amenity]] = None
    
    @validator("departure_time", "arrival_time")
    def normalize_times(cls, v):
        return as_utc(v) if v is not None else v
    
    @validator("amenities")
    def dedupe_amenities(cls, v):
        return _unique_amenities(v)

class Bus(BusBase):
    id: str
    available_seats: int
    duration_minutes: int
    created_at: datetime
    updated_at: datetime
    
    @validator("created_at", "updated_at")
    def normalize_timestamps(cls, v):
        return as_utc(v)

class BusSearch(CamelModel):
    from_location: Optional[str] = None
    to_location: Optional[str] = None
    travel_date: Optional[date] = None
    bus_type: Optional[BusType] = None

class SeatUpdateRequest(CamelModel):
    """Direct inventory adjustment: reserve when is_booking, release otherwise"""
    seats: int = Field(..., ge=1)
    is_booking: bool = True
