from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from src.config import settings
from src.database import get_db
from src.auth.utils import verify_token
from src.auth.service import UserService
from src.exceptions import UnauthorizedError

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_PREFIX}/auth/login", auto_error=False)

def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)):
    """Get current authenticated user"""
    credentials_exception = UnauthorizedError("Not authorized to access this route")
    
    if not token:
        raise credentials_exception
    
    user_id = verify_token(token, credentials_exception)
    
    user = UserService.get_user_by_id(db, user_id=user_id)
    if user is None:
        raise credentials_exception
    
    return user

def require_admin(current_user = Depends(get_current_user)):
    """Require admin role for access"""
    if not current_user.is_admin:
        raise UnauthorizedError(
            f"User role {current_user.role.value} is not authorized to access this route"
        )
    return current_user
