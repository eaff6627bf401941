import os
import tempfile
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

# Settings are read at import time, so the environment is prepared first
os.environ['SECRET_KEY'] = 'test-secret-key'
os.environ['DATABASE_URL'] = f"sqlite:///{Path(tempfile.gettempdir()) / 'lanka_tickets_import.db'}"
os.environ['LOG_LEVEL'] = 'WARNING'
os.environ.pop('LOG_DIR', None)
os.environ.pop('CANCEL_WITHOUT_REFUND', None)

from src.auth.schemas import UserCreate, UserRole  # noqa: E402
from src.auth.service import UserService  # noqa: E402
from src.auth.utils import create_access_token  # noqa: E402
from src.buses.schemas import BusCreate, BusType, OperatorInfo  # noqa: E402
from src.buses.service import BusService  # noqa: E402
from src.database import Base, build_engine, get_db  # noqa: E402
from src.main import app  # noqa: E402

DEFAULT_PASSWORD = 'P@ssw0rd123'


@pytest.fixture
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'test.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def _create_user(db, email, nic, first_name, role=UserRole.USER):
    return UserService.create_user(
        db,
        UserCreate(
            first_name=first_name,
            last_name='Perera',
            email=email,
            password=DEFAULT_PASSWORD,
            phone='+94 77 123 4567',
            nic=nic,
        ),
        role=role,
    )


@pytest.fixture
def user(db):
    return _create_user(db, 'nimal@example.lk', '901234567V', 'Nimal')


@pytest.fixture
def other_user(db):
    return _create_user(db, 'kamala@example.lk', '881234567V', 'Kamala')


@pytest.fixture
def admin(db):
    return _create_user(db, 'admin@example.lk', '801234567X', 'Admin', role=UserRole.ADMIN)


def auth_headers(user):
    token = create_access_token({'sub': user.id, 'role': user.role.value})
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def user_headers(user):
    return auth_headers(user)


@pytest.fixture
def other_headers(other_user):
    return auth_headers(other_user)


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
def make_bus(db):
    """Create a bus departing `hours_ahead` hours from now."""

    def _make(
        hours_ahead=48,
        total_seats=40,
        available_seats=None,
        price=Decimal('1000'),
        from_location='Colombo',
        to_location='Kandy',
        bus_type=BusType.INTERCITY,
    ):
        departure = datetime.now(timezone.utc) + timedelta(hours=hours_ahead)
        return BusService.create_bus(
            db,
            BusCreate(
                operator=OperatorInfo(name='NCG Express', contact='+94 77 765 4321'),
                bus_type=bus_type,
                from_location=from_location,
                to_location=to_location,
                departure_time=departure,
                arrival_time=departure + timedelta(hours=3),
                price=price,
                total_seats=total_seats,
                available_seats=available_seats,
                amenities=['AC', 'WiFi'],
            ),
        )

    return _make


def bus_payload(**overrides):
    departure = datetime.now(timezone.utc) + timedelta(days=2)
    payload = {
        'operator': {'name': 'SLTB Expressway', 'contact': '+94 11 258 1120'},
        'busType': 'Highway Bus',
        'from': 'Colombo',
        'to': 'Galle',
        'departureTime': departure.isoformat(),
        'arrivalTime': (departure + timedelta(hours=2)).isoformat(),
        'price': 650,
        'totalSeats': 49,
        'amenities': ['AC', 'WiFi', 'Toilet'],
    }
    payload.update(overrides)
    return payload
