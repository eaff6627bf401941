from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import date

from src.database import get_db
from src.auth.dependencies import get_current_user, require_admin
from src.buses.schemas import Bus, BusCreate, BusUpdate, BusSearch, BusType, SeatUpdateRequest
from src.buses.service import BusService
from src.schemas import ApiResponse

router = APIRouter()

@router.get("", response_model=ApiResponse[List[Bus]], response_model_exclude_none=True)
def get_buses(
    from_location: Optional[str] = Query(None, alias="from", description="Departure location"),
    to_location: Optional[str] = Query(None, alias="to", description="Arrival location"),
    travel_date: Optional[date] = Query(None, alias="date", description="Departure date (UTC)"),
    bus_type: Optional[BusType] = Query(None, alias="type", description="Filter by bus type"),
    db: Session = Depends(get_db)
):
    """Get buses with optional route, date and type filters"""
    search = BusSearch(
        from_location=from_location,
        to_location=to_location,
        travel_date=travel_date,
        bus_type=bus_type
    )
    
    buses = BusService.get_buses(db, search=search)
    
    return ApiResponse(
        count=len(buses),
        data=[Bus.model_validate(bus) for bus in buses]
    )

@router.get("/{bus_id}", response_model=ApiResponse[Bus], response_model_exclude_none=True)
def get_bus(bus_id: str, db: Session = Depends(get_db)):
    """Get bus details by ID"""
    bus = BusService.get_bus(db, bus_id)
    return ApiResponse(data=Bus.model_validate(bus))

@router.post(
    "",
    response_model=ApiResponse[Bus],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED
)
def create_bus(
    bus: BusCreate,
    db: Session = Depends(get_db),
    admin = Depends(require_admin)
):
    """Create a new bus trip (admin only)"""
    db_bus = BusService.create_bus(db, bus)
    return ApiResponse(data=Bus.model_validate(db_bus))

@router.put("/{bus_id}", response_model=ApiResponse[Bus], response_model_exclude_none=True)
def update_bus(
    bus_id: str,
    bus_update: BusUpdate,
    db: Session = Depends(get_db),
    admin = Depends(require_admin)
):
    """Update a bus trip (admin only)"""
    db_bus = BusService.update_bus(db, bus_id, bus_update)
    return ApiResponse(data=Bus.model_validate(db_bus))

@router.delete("/{bus_id}", response_model=ApiResponse[dict], response_model_exclude_none=True)
def delete_bus(
    bus_id: str,
    db: Session = Depends(get_db),
    admin = Depends(require_admin)
):
    """Delete a bus trip (admin only)"""
    BusService.delete_bus(db, bus_id)
    return ApiResponse(data={})

@router.put("/{bus_id}/seats", response_model=ApiResponse[Bus], response_model_exclude_none=True)
def update_bus_seats(
    bus_id: str,
    seat_update: SeatUpdateRequest,
    db: Session = Depends(get_db),
    current_user = Depends(get_current_user)
):
    """Reserve (isBooking=true) or release seats on a bus"""
    db_bus = BusService.update_available_seats(
        db, bus_id, seat_update.seats, is_reservation=seat_update.is_booking
    )
    return ApiResponse(data=Bus.model_validate(db_bus))
