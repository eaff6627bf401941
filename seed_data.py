#!/usr/bin/env python3
"""
Seed Data Script

Creates a week of sample bus trips on the main Sri Lankan highway,
intercity and local routes. Existing bookings and buses are cleared first.

Usage:
    python seed_data.py
"""

from datetime import datetime, time, timedelta, timezone
from decimal import Decimal

from loguru import logger

from src.database import Base, SessionLocal, engine
from src.logging_config import setup_logging
from src.models import Booking, Bus
from src.buses.schemas import Amenity, BusType

# (from, to, hours on the road, base fare in LKR)
HIGHWAY_ROUTES = [
    ("Colombo", "Jaffna", 9, 2200),
    ("Colombo", "Galle", 2, 650),
    ("Colombo", "Badulla", 7, 1500),
    ("Colombo", "Trincomalee", 6, 1400),
    ("Colombo", "Nuwara Eliya", 5, 1100),
]

INTERCITY_ROUTES = [
    ("Colombo", "Kandy", 3, 600),
    ("Colombo", "Negombo", 1, 250),
    ("Colombo", "Matara", 3, 700),
    ("Colombo", "Kalutara", 1, 200),
    ("Colombo", "Kurunegala", 2, 450),
]

LOCAL_ROUTES = [
    ("Colombo", "Moratuwa", 1, 80),
    ("Colombo", "Wattala", 1, 60),
    ("Colombo", "Panadura", 1, 100),
    ("Kandy", "Peradeniya", 1, 50),
    ("Galle", "Ambalangoda", 1, 90),
]

# bus type -> (operator, contact, seats, amenities, departure hours)
FLEET = {
    BusType.HIGHWAY_BUS: (
        "SLTB Expressway", "+94 11 258 1120", 49,
        [Amenity.AC, Amenity.WIFI, Amenity.USB_CHARGING, Amenity.RECLINING_SEATS, Amenity.TOILET],
        [6, 14, 21],
    ),
    BusType.INTERCITY: (
        "NCG Express", "+94 77 123 4567", 45,
        [Amenity.AC, Amenity.RECLINING_SEATS],
        [5, 9, 13, 17],
    ),
    BusType.NORMAL_COACHES: (
        "SLTB Depot", "+94 11 258 1120", 54,
        [],
        [7, 12, 18],
    ),
}

def build_trips(route_list, bus_type, start_day, days=7):
    operator, contact, seats, amenities, hours = FLEET[bus_type]
    trips = []
    for day in range(days):
        service_date = start_day + timedelta(days=day)
        for origin, destination, duration_hours, fare in route_list:
            for hour in hours:
                departure = datetime.combine(service_date, time(hour=hour), tzinfo=timezone.utc)
                trips.append(Bus(
                    operator_name=operator,
                    operator_contact=contact,
                    bus_type=bus_type,
                    from_location=origin,
                    to_location=destination,
                    departure_time=departure,
                    arrival_time=departure + timedelta(hours=duration_hours),
                    price=Decimal(fare),
                    total_seats=seats,
                    available_seats=seats,
                    amenities=[amenity.value for amenity in amenities]
                ))
    return trips

def create_seed_data():
    setup_logging()
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    
    try:
        logger.info("Creating seed data for Lanka Ticket Booking System...")
        
        # Clear existing data (in reverse dependency order)
        logger.info("Clearing existing bookings and buses...")
        db.query(Booking).delete()
        db.query(Bus).delete()
        
        start_day = datetime.now(timezone.utc).date() + timedelta(days=1)
        
        trips = (
            build_trips(HIGHWAY_ROUTES, BusType.HIGHWAY_BUS, start_day)
            + build_trips(INTERCITY_ROUTES, BusType.INTERCITY, start_day)
            + build_trips(LOCAL_ROUTES, BusType.NORMAL_COACHES, start_day)
        )
        db.add_all(trips)
        db.commit()
        
        logger.info(f"Created {len(trips)} bus trips starting {start_day.isoformat()}")
        
    except Exception as e:
        logger.error(f"Error creating seed data: {e}")
        db.rollback()
        raise
    finally:
        db.close()

if __name__ == "__main__":
    create_seed_data()
