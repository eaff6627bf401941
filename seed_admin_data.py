#!/usr/bin/env python3
"""
Admin Seed Data Script

Creates the initial admin account used to manage buses and view all
bookings. Credentials come from the ADMIN_* settings (environment or
.env) so nothing secret is committed.

Usage:
    ADMIN_EMAIL=admin@example.lk ADMIN_PASSWORD=... python seed_admin_data.py
"""

from loguru import logger

from src.config import settings
from src.database import Base, SessionLocal, engine
from src.logging_config import setup_logging
from src.auth.schemas import UserCreate, UserRole
from src.auth.service import UserService

def create_initial_admin_user():
    setup_logging()
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    
    try:
        email = settings.ADMIN_EMAIL
        password = settings.ADMIN_PASSWORD
        if not password:
            raise SystemExit("ADMIN_PASSWORD must be set")
        
        if UserService.get_user_by_email(db, email):
            logger.info(f"Admin user {email} already exists, skipping...")
            return
        
        admin = UserService.create_user(
            db,
            UserCreate(
                first_name="System",
                last_name="Administrator",
                email=email,
                password=password,
                phone=settings.ADMIN_PHONE,
                nic=settings.ADMIN_NIC,
            ),
            role=UserRole.ADMIN
        )
        logger.info(f"Created admin user {admin.email}")
    finally:
        db.close()

if __name__ == "__main__":
    create_initial_admin_user()
