"""
Goal HTTP routes.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from habitflow.auth import get_current_user
from habitflow.database import get_db
from habitflow.exceptions import (
    ConflictException, GoalNotFoundException, HabitNotFoundException
)
from habitflow.models import User
from habitflow.schemas import GoalCheckResponse, GoalCreate, GoalResponse, GoalUpdate
from habitflow.services.goal_service import GoalService

router = APIRouter(prefix="/api/goals", tags=["goals"])


# Must be registered before /{goal_id}
@router.post("/check", response_model=GoalCheckResponse)
def check_goals(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Complete pending goals whose habit streak reached the target"""
    completed_count = GoalService(db).recheck_goals(user)
    return {
        "completed_count": completed_count,
        "message": f"{completed_count} goal(s) completed!"
    }


@router.post("", response_model=GoalResponse, status_code=status.HTTP_201_CREATED)
def create_goal(goal: GoalCreate, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Create a goal for a habit"""
    try:
        return GoalService(db).create_goal(user, goal)
    except HabitNotFoundException as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ConflictException as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.get("", response_model=List[GoalResponse])
def get_goals(
    completed: Optional[bool] = None,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get own goals, optionally filtered by completion"""
    return GoalService(db).get_goals(user, completed)


@router.get("/{goal_id}", response_model=GoalResponse)
def get_goal(goal_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Get a specific goal"""
    try:
        return GoalService(db).get_goal(user, goal_id)
    except GoalNotFoundException as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.put("/{goal_id}", response_model=GoalResponse)
def update_goal(
    goal_id: int,
    goal_update: GoalUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update a goal (e.g. change target, mark complete)"""
    try:
        return GoalService(db).update_goal(user, goal_id, goal_update)
    except GoalNotFoundException as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ConflictException as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.delete("/{goal_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_goal(goal_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Delete a goal"""
    try:
        GoalService(db).delete_goal(user, goal_id)
    except GoalNotFoundException as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
