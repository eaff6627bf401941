from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from typing import Optional
from loguru import logger

from src.models import User
from src.auth.schemas import UserCreate, UserRole
from src.auth.utils import get_password_hash, verify_password
from src.exceptions import DuplicateResourceError

class UserService:
    @staticmethod
    def get_user_by_email(db: Session, email: str) -> Optional[User]:
        """Get user by email"""
        return db.query(User).filter(User.email == email.lower()).first()
    
    @staticmethod
    def get_user_by_id(db: Session, user_id: str) -> Optional[User]:
        """Get user by ID"""
        return db.query(User).filter(User.id == user_id).first()
    
    @staticmethod
    def create_user(db: Session, user: UserCreate, role: UserRole = UserRole.USER) -> User:
        """Create a new user with a hashed password"""
        if UserService.get_user_by_email(db, user.email):
            raise DuplicateResourceError("Email already registered")
        
        if db.query(User).filter(User.nic == user.nic).first():
            raise DuplicateResourceError("NIC already registered")
        
        db_user = User(
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            password=get_password_hash(user.password),
            phone=user.phone,
            nic=user.nic,
            role=role
        )
        
        try:
            db.add(db_user)
            db.commit()
            db.refresh(db_user)
        except IntegrityError:
            db.rollback()
            raise DuplicateResourceError("Email or NIC already registered")
        
        logger.info(f"Registered {role.value} {db_user.id}")
        return db_user
    
    @staticmethod
    def authenticate_user(db: Session, email: str, password: str) -> Optional[User]:
        """Authenticate user with email and password"""
        user = UserService.get_user_by_email(db, email)
        if not user:
            return None
        if not verify_password(password, user.password):
            return None
        return user
