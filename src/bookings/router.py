from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from src.database import get_db
from src.auth.dependencies import get_current_user, require_admin
from src.bookings.schemas import Booking, BookingCreate, BookingCancellation
from src.bookings.booking_service import BookingService
from src.exceptions import UnauthorizedError
from src.schemas import ApiResponse

router = APIRouter()

def _ensure_owner_or_admin(booking, user, action: str) -> None:
    if booking.user_id != user.id and not user.is_admin:
        raise UnauthorizedError(f"Not authorized to {action} this booking")

@router.get("", response_model=ApiResponse[List[Booking]], response_model_exclude_none=True)
def get_my_bookings(
    db: Session = Depends(get_db),
    current_user = Depends(get_current_user)
):
    """Get the current user's bookings, newest first"""
    bookings = BookingService(db).get_user_bookings(current_user.id)
    
    return ApiResponse(
        count=len(bookings),
        data=[Booking.model_validate(booking) for booking in bookings]
    )

@router.get("/admin", response_model=ApiResponse[List[Booking]], response_model_exclude_none=True)
def get_all_bookings(
    db: Session = Depends(get_db),
    admin = Depends(require_admin)
):
    """Get every booking with its owner (admin only)"""
    bookings = BookingService(db).get_all_bookings()
    
    return ApiResponse(
        count=len(bookings),
        data=[Booking.model_validate(booking) for booking in bookings]
    )

@router.get("/{booking_id}", response_model=ApiResponse[Booking], response_model_exclude_none=True)
def get_booking(
    booking_id: str,
    db: Session = Depends(get_db),
    current_user = Depends(get_current_user)
):
    """Get booking details by ID"""
    booking = BookingService(db).get_booking(booking_id)
    _ensure_owner_or_admin(booking, current_user, "access")
    
    return ApiResponse(data=Booking.model_validate(booking))

@router.post(
    "",
    response_model=ApiResponse[Booking],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED
)
def create_booking(
    request: BookingCreate,
    db: Session = Depends(get_db),
    current_user = Depends(get_current_user)
):
    """Book seats on a bus"""
    booking = BookingService(db).create_booking(current_user.id, request)
    return ApiResponse(data=Booking.model_validate(booking))

@router.put("/{booking_id}/cancel", response_model=ApiResponse[BookingCancellation], response_model_exclude_none=True)
def cancel_booking(
    booking_id: str,
    db: Session = Depends(get_db),
    current_user = Depends(get_current_user)
):
    """Cancel a booking and refund according to time left before departure"""
    booking_service = BookingService(db)
    
    booking = booking_service.get_booking(booking_id)
    _ensure_owner_or_admin(booking, current_user, "cancel")
    
    booking, refund_amount = booking_service.cancel_booking(booking_id)
    
    return ApiResponse(
        data=BookingCancellation(
            booking=Booking.model_validate(booking),
            refund_amount=refund_amount
        )
    )
