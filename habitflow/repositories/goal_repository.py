"""
Goal repository - Data access layer for Goal model.
"""
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from habitflow.models import Goal
from habitflow.exceptions import ConcurrentUpdateException


class GoalRepository:
    """Repository for Goal data access"""

    @staticmethod
    def get_for_user(db: Session, goal_id: int, user_id: int) -> Optional[Goal]:
        """Get goal by ID, only if owned by user"""
        return db.query(Goal).filter(
            Goal.id == goal_id,
            Goal.user_id == user_id
        ).first()

    @staticmethod
    def get_all_for_user(
        db: Session, user_id: int, completed: Optional[bool] = None
    ) -> List[Goal]:
        """Get user's goals, newest first"""
        query = db.query(Goal).filter(Goal.user_id == user_id)
        if completed is not None:
            query = query.filter(Goal.is_completed == completed)
        return query.order_by(Goal.created_at.desc(), Goal.id.desc()).all()

    @staticmethod
    def get_active_for_habit(db: Session, user_id: int, habit_id: int) -> Optional[Goal]:
        """Get the user's non-completed goal for a habit, if any"""
        return db.query(Goal).filter(
            Goal.user_id == user_id,
            Goal.habit_id == habit_id,
            Goal.is_completed == False
        ).first()

    @staticmethod
    def get_pending_user_ids(db: Session) -> List[int]:
        """Get IDs of users holding at least one non-completed goal"""
        rows = db.query(Goal.user_id).filter(
            Goal.is_completed == False
        ).distinct().all()
        return [row[0] for row in rows]

    @staticmethod
    def create(db: Session, goal: Goal) -> Goal:
        """Create new goal"""
        db.add(goal)
        db.commit()
        db.refresh(goal)
        return goal

    @staticmethod
    def update(db: Session, goal: Goal) -> Goal:
        """
        Persist changes to a goal.

        Raises:
            ConcurrentUpdateException: if the row's version changed since it was loaded
        """
        goal_id = goal.id
        try:
            db.commit()
        except StaleDataError:
            db.rollback()
            raise ConcurrentUpdateException("Goal", goal_id)
        db.refresh(goal)
        return goal

    @staticmethod
    def delete(db: Session, goal: Goal) -> None:
        """Delete a goal"""
        db.delete(goal)
        db.commit()

    @staticmethod
    def delete_for_habit(db: Session, habit_id: int) -> int:
        """Delete all goals of a habit. Caller commits."""
        return db.query(Goal).filter(
            Goal.habit_id == habit_id
        ).delete(synchronize_session=False)

    @staticmethod
    def delete_for_user(db: Session, user_id: int) -> int:
        """Delete all goals of a user. Caller commits."""
        return db.query(Goal).filter(
            Goal.user_id == user_id
        ).delete(synchronize_session=False)
