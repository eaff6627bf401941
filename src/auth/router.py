from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from src.database import get_db
from src.auth.schemas import UserCreate, User, LoginRequest, AuthResponse
from src.auth.service import UserService
from src.auth.utils import create_access_token
from src.auth.dependencies import get_current_user
from src.exceptions import UnauthorizedError
from src.schemas import ApiResponse

router = APIRouter()

def _issue_token(user) -> AuthResponse:
    access_token = create_access_token(data={"sub": user.id, "role": user.role.value})
    return AuthResponse(access_token=access_token, user=User.model_validate(user))

@router.post(
    "/register",
    response_model=ApiResponse[AuthResponse],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED
)
def register_user(user: UserCreate, db: Session = Depends(get_db)):
    """Register a new user"""
    db_user = UserService.create_user(db=db, user=user)
    return ApiResponse(data=_issue_token(db_user))

@router.post("/login", response_model=ApiResponse[AuthResponse], response_model_exclude_none=True)
def login(login_data: LoginRequest, db: Session = Depends(get_db)):
    """Log in with email and password"""
    user = UserService.authenticate_user(db, login_data.email, login_data.password)
    if not user:
        raise UnauthorizedError("Invalid credentials")
    return ApiResponse(data=_issue_token(user))

@router.get("/me", response_model=ApiResponse[User], response_model_exclude_none=True)
def read_users_me(current_user = Depends(get_current_user)):
    """Get current user profile"""
    return ApiResponse(data=User.model_validate(current_user))
