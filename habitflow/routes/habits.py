"""
Habit HTTP routes.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from habitflow.auth import get_current_user
from habitflow.database import get_db
from habitflow.exceptions import (
    ConcurrentUpdateException, HabitNotFoundException, InvalidInputException
)
from habitflow.models import User
from habitflow.schemas import (
    HabitCheck, HabitCreate, HabitResponse, HabitStatsResponse, HabitUpdate, LogResponse
)
from habitflow.services.habit_service import HabitService

router = APIRouter(prefix="/api/habits", tags=["habits"])


# Must be registered before /{habit_id}
@router.get("/stats", response_model=HabitStatsResponse)
def get_stats(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Summary statistics over active habits"""
    return HabitService(db).get_stats(user)


@router.post("", response_model=HabitResponse, status_code=status.HTTP_201_CREATED)
def create_habit(
    habit: HabitCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create a new habit"""
    return HabitService(db).create_habit(user, habit)


@router.get("", response_model=List[HabitResponse])
def get_habits(
    category: Optional[str] = None,
    is_active: Optional[bool] = None,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get own habits with optional filtering"""
    return HabitService(db).get_habits(user, category, is_active)


@router.get("/{habit_id}", response_model=HabitResponse)
def get_habit(habit_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Get a specific habit"""
    try:
        return HabitService(db).get_habit(user, habit_id)
    except HabitNotFoundException as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.put("/{habit_id}", response_model=HabitResponse)
def update_habit(
    habit_id: int,
    habit_update: HabitUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update a habit"""
    try:
        return HabitService(db).update_habit(user, habit_id, habit_update)
    except HabitNotFoundException as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ConcurrentUpdateException as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.delete("/{habit_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_habit(habit_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Delete a habit with its logs and goals (admins may delete any habit)"""
    try:
        HabitService(db).delete_habit(user, habit_id)
    except HabitNotFoundException:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Habit not found or not authorized")


@router.put("/{habit_id}/check", response_model=HabitResponse)
def check_habit(
    habit_id: int,
    check: HabitCheck,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Mark a weekday done or not done"""
    try:
        return HabitService(db).set_day_status(
            user, habit_id, check.day, check.completed, check.note, check.mood
        )
    except InvalidInputException as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except HabitNotFoundException as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ConcurrentUpdateException as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.get("/{habit_id}/logs", response_model=List[LogResponse])
def get_habit_logs(
    habit_id: int,
    limit: int = Query(100, ge=1, le=1000),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get completion logs of a habit, newest first"""
    try:
        return HabitService(db).get_logs(user, habit_id, limit)
    except HabitNotFoundException as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
