from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    # Database
    DATABASE_URL: Optional[str] = None
    PGHOST: str = "localhost"
    PGDATABASE: str = "lanka_tickets"
    PGUSER: str = "postgres"
    PGPASSWORD: str = ""
    PGSSLMODE: str = "prefer"
    
    # Security
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    
    # Application
    PROJECT_NAME: str = "Lanka Ticket Booking System"
    API_PREFIX: str = "/api"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]
    
    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None
    
    # Booking policy
    CANCEL_WITHOUT_REFUND: bool = False  # cancel even when the refund policy pays nothing
    SEAT_RELEASE_CAP_AT_TOTAL: bool = True
    
    # Initial admin account (seed_admin_data.py)
    ADMIN_EMAIL: str = "admin@lankatickets.lk"
    ADMIN_PASSWORD: Optional[str] = None
    ADMIN_PHONE: str = "+94 11 000 0000"
    ADMIN_NIC: str = "000000000V"
    
    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"postgresql://{self.PGUSER}:{self.PGPASSWORD}@{self.PGHOST}/{self.PGDATABASE}?sslmode={self.PGSSLMODE}"
    
    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
