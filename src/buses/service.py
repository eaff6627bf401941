from sqlalchemy.orm import Session
from sqlalchemy import update, case
from typing import List, Optional
from datetime import datetime, time, timedelta, timezone
from loguru import logger

from src.models import Bus, Booking
from src.buses.schemas import BusCreate, BusUpdate, BusSearch
from src.config import settings
from src.exceptions import DomainError, NotFoundError, InsufficientInventoryError, ResourceInUseError
from src.utils import utcnow

class BusService:
    @staticmethod
    def get_bus_by_id(db: Session, bus_id: str) -> Optional[Bus]:
        """Get bus by ID"""
        return db.query(Bus).filter(Bus.id == bus_id).first()
    
    @staticmethod
    def get_bus(db: Session, bus_id: str) -> Bus:
        """Get bus by ID, raising NotFoundError when it does not exist"""
        bus = BusService.get_bus_by_id(db, bus_id)
        if bus is None:
            raise NotFoundError("Bus not found")
        return bus
    
    @staticmethod
    def get_buses(db: Session, search: Optional[BusSearch] = None) -> List[Bus]:
        """Get buses ordered by departure, with optional route/date/type filters"""
        query = db.query(Bus)
        
        if search:
            if search.from_location:
                query = query.filter(Bus.from_location == search.from_location)
            
            if search.to_location:
                query = query.filter(Bus.to_location == search.to_location)
            
            if search.bus_type:
                query = query.filter(Bus.bus_type == search.bus_type)
            
            if search.travel_date:
                day_start = datetime.combine(search.travel_date, time.min, tzinfo=timezone.utc)
                query = query.filter(
                    Bus.departure_time >= day_start,
                    Bus.departure_time < day_start + timedelta(days=1)
                )
        
        return query.order_by(Bus.departure_time.asc()).all()
    
    @staticmethod
    def create_bus(db: Session, bus: BusCreate) -> Bus:
        """Create a new bus trip"""
        available_seats = bus.available_seats if bus.available_seats is not None else bus.total_seats
        if available_seats > bus.total_seats:
            raise DomainError("Available seats cannot exceed total seats")
        
        db_bus = Bus(
            operator_name=bus.operator.name,
            operator_contact=bus.operator.contact,
            bus_type=bus.bus_type,
            from_location=bus.from_location,
            to_location=bus.to_location,
            departure_time=bus.departure_time,
            arrival_time=bus.arrival_time,
            price=bus.price,
            total_seats=bus.total_seats,
            available_seats=available_seats,
            status=bus.status,
            amenities=[amenity.value for amenity in bus.amenities]
        )
        
        db.add(db_bus)
        db.commit()
        db.refresh(db_bus)
        logger.info(f"Created bus {db_bus.id} {db_bus.from_location} -> {db_bus.to_location}")
        return db_bus
    
    @staticmethod
    def update_bus(db: Session, bus_id: str, bus_update: BusUpdate) -> Bus:
        """Apply a partial update to a bus"""
        db_bus = BusService.get_bus(db, bus_id)
        
        update_data = bus_update.dict(exclude_unset=True)

        for field, value in update_data.items():
            if value is None:
                raise DomainError(f"{field} cannot be null")

        operator = update_data.pop("operator", None)
        if operator is not None:
            db_bus.operator_name = operator["name"]
            db_bus.operator_contact = operator["contact"]

        if "amenities" in update_data:
            update_data["amenities"] = [amenity.value for amenity in update_data["amenities"]]

        for field, value in update_data.items():
            setattr(db_bus, field, value)
        
        if db_bus.available_seats > db_bus.total_seats:
            db.rollback()
            raise DomainError("Available seats cannot exceed total seats")
        
        db.commit()
        db.refresh(db_bus)
        logger.info(f"Updated bus {db_bus.id}: {sorted(update_data)}")
        return db_bus
    
    @staticmethod
    def delete_bus(db: Session, bus_id: str) -> None:
        """Delete a bus that has no bookings"""
        db_bus = BusService.get_bus(db, bus_id)
        
        has_bookings = db.query(Booking.id).filter(Booking.bus_id == bus_id).first() is not None
        if has_bookings:
            raise ResourceInUseError("Cannot delete a bus that has bookings")
        
        db.delete(db_bus)
        db.commit()
        logger.info(f"Deleted bus {bus_id}")
    
    # ================================
    # Seat inventory
    # ================================
    @staticmethod
    def reserve_seats(db: Session, bus_id: str, count: int) -> None:
        """Take `count` seats off the bus inside the caller's transaction.
        
        The availability check and the decrement are a single conditional
        UPDATE, so concurrent reservations cannot drive the counter below zero.
        """
        result = db.execute(
            update(Bus)
            .where(Bus.id == bus_id, Bus.available_seats >= count)
            .values(available_seats=Bus.available_seats - count, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        
        if result.rowcount == 0:
            if BusService.get_bus_by_id(db, bus_id) is None:
                raise NotFoundError("Bus not found")
            logger.warning(f"Reservation of {count} seats on bus {bus_id} rejected: not enough seats")
            raise InsufficientInventoryError()
        
        logger.info(f"Reserved {count} seats on bus {bus_id}")
    
    @staticmethod
    def release_seats(db: Session, bus_id: str, count: int, cap_at_total: Optional[bool] = None) -> None:
        """Return `count` seats to the bus inside the caller's transaction"""
        if cap_at_total is None:
            cap_at_total = settings.SEAT_RELEASE_CAP_AT_TOTAL
        
        released = Bus.available_seats + count
        if cap_at_total:
            released = case((released > Bus.total_seats, Bus.total_seats), else_=released)
        
        result = db.execute(
            update(Bus)
            .where(Bus.id == bus_id)
            .values(available_seats=released, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        
        if result.rowcount == 0:
            raise NotFoundError("Bus not found")
        
        logger.info(f"Released {count} seats on bus {bus_id}")
    
    @staticmethod
    def update_available_seats(db: Session, bus_id: str, count: int, is_reservation: bool = True) -> Bus:
        """Reserve or release seats and commit"""
        try:
            if is_reservation:
                BusService.reserve_seats(db, bus_id, count)
            else:
                BusService.release_seats(db, bus_id, count)
            db.commit()
        except Exception:
            db.rollback()
            raise
        
        db_bus = BusService.get_bus(db, bus_id)
        db.refresh(db_bus)
        return db_bus
