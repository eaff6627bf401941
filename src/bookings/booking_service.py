from typing import List, Optional, Tuple
from datetime import datetime
from decimal import Decimal
from sqlalchemy import update
from sqlalchemy.orm import Session, joinedload
from loguru import logger

from src.models import Booking
from src.bookings.schemas import (
    BookingCreate, BookingStatus, PaymentStatus, RefundStatus
)
from src.bookings.refund_policy import calculate_refund
from src.buses.schemas import BusStatus
from src.buses.service import BusService
from src.config import settings
from src.exceptions import (
    DomainError, NotFoundError, InsufficientInventoryError, AlreadyCancelledError,
    BookingNotCancellableError, RefundNotEligibleError
)
from src.utils import utcnow

UNBOOKABLE_BUS_STATUSES = (BusStatus.CANCELLED, BusStatus.COMPLETED)

class BookingService:
    """Service for managing seat bookings"""

    def __init__(self, db: Session, cancel_without_refund: Optional[bool] = None):
        self.db = db
        if cancel_without_refund is None:
            cancel_without_refund = settings.CANCEL_WITHOUT_REFUND
        self.cancel_without_refund = cancel_without_refund

    def create_booking(self, user_id: str, request: BookingCreate) -> Booking:
        """Book seats on a bus.

        The seat reservation and the booking row are written in one
        transaction; if either fails neither is kept.
        """
        bus = BusService.get_bus(self.db, request.bus_id)

        if bus.status in UNBOOKABLE_BUS_STATUSES:
            raise DomainError(f"Bus is {bus.status.value} and cannot be booked")

        seat_count = len(request.seats)
        if not bus.has_available_seats(seat_count):
            raise InsufficientInventoryError()

        booking = Booking(
            user_id=user_id,
            bus_id=bus.id,
            seats=list(request.seats),
            total_amount=bus.price * seat_count,
            payment_method=request.payment_method,
            status=BookingStatus.PENDING,
            payment_status=PaymentStatus.PENDING
        )

        try:
            BusService.reserve_seats(self.db, bus.id, seat_count)
            self.db.add(booking)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(booking)
        logger.info(
            f"Booking {booking.booking_reference} created for user {user_id}: "
            f"{seat_count} seats on bus {bus.id}, total {booking.total_amount}"
        )
        return booking

    def cancel_booking(self, booking_id: str, now: Optional[datetime] = None) -> Tuple[Booking, Decimal]:
        """Cancel a booking, apply the refund policy and release its seats"""

        booking = self.get_booking(booking_id)

        if booking.status == BookingStatus.CANCELLED:
            raise AlreadyCancelledError()

        if booking.status.is_terminal:
            raise BookingNotCancellableError(f"{booking.status.value.capitalize()} bookings cannot be cancelled")

        refund_amount = calculate_refund(booking.total_amount, booking.bus.departure_time, now)

        if refund_amount > 0:
            changes = {
                "status": BookingStatus.CANCELLED,
                "refund_amount": refund_amount,
                "refund_status": RefundStatus.APPROVED,
                "payment_status": PaymentStatus.REFUNDED,
            }
        elif self.cancel_without_refund:
            changes = {
                "status": BookingStatus.CANCELLED,
                "refund_amount": Decimal("0"),
                "refund_status": RefundStatus.REJECTED,
            }
        else:
            # Refund refused: the booking stays active and keeps its seats
            try:
                self._update_if_active(booking.id, {"refund_status": RefundStatus.REJECTED})
                self.db.commit()
            except Exception:
                self.db.rollback()
                raise
            logger.warning(f"Refund rejected for booking {booking.booking_reference}: too close to departure")
            raise RefundNotEligibleError()

        try:
            self._update_if_active(booking.id, changes)
            BusService.release_seats(self.db, booking.bus_id, len(booking.seats))
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(booking)
        logger.info(f"Booking {booking.booking_reference} cancelled, refund {refund_amount}")
        return booking, refund_amount

    def get_booking(self, booking_id: str) -> Booking:
        """Get booking by ID"""
        booking = self.db.query(Booking).options(
            joinedload(Booking.bus)
        ).filter(Booking.id == booking_id).first()

        if booking is None:
            raise NotFoundError("Booking not found")

        return booking

    def get_user_bookings(self, user_id: str) -> List[Booking]:
        """Get all bookings for a user, newest first"""
        return self.db.query(Booking).options(
            joinedload(Booking.bus)
        ).filter(
            Booking.user_id == user_id
        ).order_by(Booking.created_at.desc()).all()

    def get_all_bookings(self) -> List[Booking]:
        """Get every booking with its bus and owner, newest first"""
        return self.db.query(Booking).options(
            joinedload(Booking.bus),
            joinedload(Booking.user)
        ).order_by(Booking.created_at.desc()).all()

    def _update_if_active(self, booking_id: str, changes: dict) -> None:
        # Conditional on the current status so a concurrent cancel wins exactly once
        result = self.db.execute(
            update(Booking)
            .where(Booking.id == booking_id, Booking.status != BookingStatus.CANCELLED)
            .values(updated_at=utcnow(), **changes)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise AlreadyCancelledError()
