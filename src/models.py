from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Numeric, JSON, Enum, CheckConstraint
from sqlalchemy.orm import relationship

from src.database import Base
from src.utils import utcnow, new_id
from src.auth.schemas import UserRole
from src.buses.schemas import BusType, BusStatus
from src.bookings.schemas import BookingStatus, PaymentStatus, PaymentMethod, RefundStatus

BOOKING_REFERENCE_PREFIX = "BUS"

def _enum_column(enum_cls, **kwargs):
    """Store the enum's string value; unknown values are rejected on write"""
    return Column(
        Enum(
            enum_cls,
            native_enum=False,
            length=32,
            validate_strings=True,
            values_callable=lambda members: [m.value for m in members],
        ),
        **kwargs
    )

# ================================
# Users
# ================================
class User(Base):
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=new_id)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)
    phone = Column(String(32), nullable=False)
    nic = Column(String(12), unique=True, nullable=False)
    role = _enum_column(UserRole, nullable=False, default=UserRole.USER)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    # Relationships
    bookings = relationship("Booking", back_populates="user")

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

# ================================
# Buses (one row per scheduled trip)
# ================================
class Bus(Base):
    __tablename__ = "buses"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_buses_price_non_negative"),
        CheckConstraint("total_seats >= 1", name="ck_buses_total_seats_positive"),
        CheckConstraint("available_seats >= 0", name="ck_buses_available_seats_non_negative"),
    )

    id = Column(String(32), primary_key=True, default=new_id)
    operator_name = Column(String(255), nullable=False)
    operator_contact = Column(String(100), nullable=False)
    bus_type = _enum_column(BusType, nullable=False, index=True)
    from_location = Column(String(255), nullable=False, index=True)
    to_location = Column(String(255), nullable=False, index=True)
    departure_time = Column(DateTime(timezone=True), nullable=False, index=True)
    arrival_time = Column(DateTime(timezone=True), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    total_seats = Column(Integer, nullable=False)
    available_seats = Column(Integer, nullable=False)
    status = _enum_column(BusStatus, nullable=False, default=BusStatus.SCHEDULED)
    amenities = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    # Relationships
    bookings = relationship("Booking", back_populates="bus")

    @property
    def operator(self) -> dict:
        return {"name": self.operator_name, "contact": self.operator_contact}

    @property
    def duration_minutes(self) -> int:
        return int((self.arrival_time - self.departure_time).total_seconds() // 60)

    def has_available_seats(self, count: int) -> bool:
        return self.available_seats >= count

# ================================
# Bookings
# ================================
class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        CheckConstraint("total_amount >= 0", name="ck_bookings_total_amount_non_negative"),
        CheckConstraint("refund_amount >= 0", name="ck_bookings_refund_amount_non_negative"),
    )

    id = Column(String(32), primary_key=True, default=new_id)
    user_id = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)
    bus_id = Column(String(32), ForeignKey("buses.id"), nullable=False, index=True)
    seats = Column(JSON, nullable=False)
    total_amount = Column(Numeric(10, 2), nullable=False)
    status = _enum_column(BookingStatus, nullable=False, default=BookingStatus.PENDING, index=True)
    payment_status = _enum_column(PaymentStatus, nullable=False, default=PaymentStatus.PENDING)
    payment_method = _enum_column(PaymentMethod, nullable=False)
    booking_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    refund_status = _enum_column(RefundStatus, nullable=False, default=RefundStatus.NONE)
    refund_amount = Column(Numeric(10, 2), nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    # Relationships
    user = relationship("User", back_populates="bookings")
    bus = relationship("Bus", back_populates="bookings")

    @property
    def booking_reference(self) -> str:
        return f"{BOOKING_REFERENCE_PREFIX}{self.id[-6:].upper()}"
