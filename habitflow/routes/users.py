"""
User HTTP routes: own profile plus admin account management.
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from habitflow.auth import get_current_user, require_admin
from habitflow.database import get_db
from habitflow.exceptions import (
    ConflictException, ForbiddenActionException, InvalidInputException,
    UserNotFoundException
)
from habitflow.models import User
from habitflow.schemas import ProfileResponse, ProfileUpdate, RoleUpdate, UserResponse
from habitflow.services.user_service import UserService

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/profile", response_model=ProfileResponse)
def get_profile(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Get own profile with active habit count"""
    return UserService(db).get_profile(user)


@router.put("/profile", response_model=ProfileResponse)
def update_profile(
    data: ProfileUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update own profile"""
    service = UserService(db)
    try:
        user = service.update_profile(user, data)
    except ConflictException as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return service.get_profile(user)


@router.get("", response_model=List[UserResponse])
def get_all_users(_: User = Depends(require_admin), db: Session = Depends(get_db)):
    """List all users (admin only)"""
    return UserService(db).get_all_users()


@router.patch("/{user_id}/role", response_model=UserResponse)
def update_user_role(
    user_id: int,
    data: RoleUpdate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Change a user's role (admin only, never your own)"""
    try:
        return UserService(db).update_role(admin, user_id, data.role)
    except (InvalidInputException, ForbiddenActionException) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except UserNotFoundException as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Delete a user and everything they own (admin only)"""
    try:
        UserService(db).delete_user(admin, user_id)
    except ForbiddenActionException as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except UserNotFoundException as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
