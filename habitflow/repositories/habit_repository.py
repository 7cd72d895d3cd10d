"""
Habit repository - Data access layer for Habit and Log models.
Handles all database queries related to habits and their completion logs.
"""
from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from habitflow.models import Habit, Log
from habitflow.exceptions import ConcurrentUpdateException


class HabitRepository:
    """Repository for Habit data access"""

    @staticmethod
    def get_by_id(db: Session, habit_id: int) -> Optional[Habit]:
        """Get habit by ID regardless of owner"""
        return db.query(Habit).filter(Habit.id == habit_id).first()

    @staticmethod
    def get_for_user(db: Session, habit_id: int, user_id: int) -> Optional[Habit]:
        """Get habit by ID, only if owned by user"""
        return db.query(Habit).filter(
            Habit.id == habit_id,
            Habit.user_id == user_id
        ).first()

    @staticmethod
    def get_all_for_user(
        db: Session,
        user_id: int,
        category: Optional[str] = None,
        is_active: Optional[bool] = None
    ) -> List[Habit]:
        """Get user's habits, newest first, with optional filters"""
        query = db.query(Habit).filter(Habit.user_id == user_id)
        if category:
            query = query.filter(Habit.category == category)
        if is_active is not None:
            query = query.filter(Habit.is_active == is_active)
        return query.order_by(Habit.created_at.desc(), Habit.id.desc()).all()

    @staticmethod
    def count_active_for_user(db: Session, user_id: int) -> int:
        """Count user's active habits"""
        return db.query(Habit).filter(
            Habit.user_id == user_id,
            Habit.is_active == True
        ).count()

    @staticmethod
    def create(db: Session, habit: Habit) -> Habit:
        """Create new habit"""
        db.add(habit)
        db.commit()
        db.refresh(habit)
        return habit

    @staticmethod
    def update(db: Session, habit: Habit) -> Habit:
        """
        Persist changes to a habit.

        Raises:
            ConcurrentUpdateException: if the row's version changed since it was loaded
        """
        habit_id = habit.id
        try:
            db.commit()
        except StaleDataError:
            db.rollback()
            raise ConcurrentUpdateException("Habit", habit_id)
        db.refresh(habit)
        return habit

    @staticmethod
    def delete(db: Session, habit: Habit) -> None:
        """Delete a habit (and commit anything else pending in the session)"""
        db.delete(habit)
        db.commit()

    @staticmethod
    def delete_for_user(db: Session, user_id: int) -> int:
        """Delete all habits of a user. Caller commits."""
        return db.query(Habit).filter(
            Habit.user_id == user_id
        ).delete(synchronize_session=False)


class LogRepository:
    """Repository for Log data access"""

    @staticmethod
    def create(db: Session, log: Log) -> Log:
        """Create new completion log"""
        db.add(log)
        db.commit()
        db.refresh(log)
        return log

    @staticmethod
    def get_for_habit(db: Session, habit_id: int, limit: int = 100) -> List[Log]:
        """Get habit's logs, newest first"""
        return db.query(Log).filter(
            Log.habit_id == habit_id
        ).order_by(Log.completed_at.desc(), Log.id.desc()).limit(limit).all()

    @staticmethod
    def get_latest_since(
        db: Session, user_id: int, habit_id: int, since: datetime
    ) -> Optional[Log]:
        """Get the most recent log for (user, habit) completed at or after `since`"""
        return db.query(Log).filter(
            Log.user_id == user_id,
            Log.habit_id == habit_id,
            Log.completed_at >= since
        ).order_by(Log.completed_at.desc(), Log.id.desc()).first()

    @staticmethod
    def delete(db: Session, log: Log) -> None:
        """Delete a single log"""
        db.delete(log)
        db.commit()

    @staticmethod
    def delete_for_habit(db: Session, habit_id: int) -> int:
        """Delete all logs of a habit. Caller commits."""
        return db.query(Log).filter(
            Log.habit_id == habit_id
        ).delete(synchronize_session=False)

    @staticmethod
    def delete_for_user(db: Session, user_id: int) -> int:
        """Delete all logs of a user. Caller commits."""
        return db.query(Log).filter(
            Log.user_id == user_id
        ).delete(synchronize_session=False)
