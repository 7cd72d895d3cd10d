"""
Auth HTTP routes.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from habitflow.auth import get_current_user
from habitflow.database import get_db
from habitflow.exceptions import AuthenticationException, ConflictException
from habitflow.models import User
from habitflow.schemas import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from habitflow.services.user_service import UserService

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(data: RegisterRequest, db: Session = Depends(get_db)):
    """Create an account"""
    try:
        user, token = UserService(db).register(data)
    except ConflictException as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return {"token": token, "user": user}


@router.post("/login", response_model=AuthResponse)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    """Exchange credentials for a token"""
    try:
        user, token = UserService(db).login(data.email, data.password)
    except AuthenticationException as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    return {"token": token, "user": user}


@router.get("/me", response_model=UserResponse)
def me(user: User = Depends(get_current_user)):
    """Get the authenticated user"""
    return user
