from pydantic import EmailStr, Field, validator
from datetime import datetime
from enum import Enum
import re

from src.schemas import CamelModel
from src.utils import as_utc

PHONE_PATTERN = re.compile(r"^\+?[\d\s-]{10,}$")
NIC_PATTERN = re.compile(r"^[0-9]{9}[vVxX]$")

class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"

class UserBase(CamelModel):
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: EmailStr
    phone: str
    nic: str
    
    @validator("first_name", "last_name", pre=True)
    def strip_names(cls, v):
        return v.strip() if isinstance(v, str) else v
    
    @validator("email")
    def lowercase_email(cls, v):
        return v.lower()
    
    @validator("phone")
    def validate_phone(cls, v):
        if not PHONE_PATTERN.match(v):
            raise ValueError("Please provide a valid phone number")
        return v
    
    @validator("nic")
    def validate_nic(cls, v):
        if not NIC_PATTERN.match(v):
            raise ValueError("Please provide a valid NIC")
        return v

class UserCreate(UserBase):
    password: str = Field(..., min_length=8)

class User(UserBase):
    id: str
    role: UserRole
    created_at: datetime
    updated_at: datetime
    
    @validator("created_at", "updated_at")
    def normalize_timestamps(cls, v):
        return as_utc(v)

class UserSummary(CamelModel):
    """Owner details attached to bookings in the admin listing"""
    id: str
    first_name: str
    last_name: str
    email: EmailStr

class LoginRequest(CamelModel):
    email: EmailStr
    password: str

class AuthResponse(CamelModel):
    access_token: str
    token_type: str = "bearer"
    user: User
