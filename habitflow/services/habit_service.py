"""
Habit management service.
Handles habit CRUD, daily check-ins and the weekly streak counters.
"""
import logging
from typing import List, Optional
from sqlalchemy.orm import Session

from habitflow.models import Habit, Log, User
from habitflow.schemas import HabitCreate, HabitUpdate
from habitflow.repositories.habit_repository import HabitRepository, LogRepository
from habitflow.repositories.goal_repository import GoalRepository
from habitflow.services.date_service import DateService
from habitflow.exceptions import HabitNotFoundException, InvalidInputException
from habitflow.constants import WEEKDAYS, LOG_MOODS, ROLE_ADMIN

logger = logging.getLogger("habitflow.habits")


class HabitService:
    """Service for habit management"""

    def __init__(self, db: Session):
        self.db = db
        self.habit_repo = HabitRepository()
        self.log_repo = LogRepository()
        self.goal_repo = GoalRepository()
        self.date_service = DateService()

    def get_habits(
        self,
        user: User,
        category: Optional[str] = None,
        is_active: Optional[bool] = None
    ) -> List[Habit]:
        """Get user's habits, newest first"""
        return self.habit_repo.get_all_for_user(self.db, user.id, category, is_active)

    def get_habit(self, user: User, habit_id: int) -> Habit:
        """Get one of the user's habits"""
        habit = self.habit_repo.get_for_user(self.db, habit_id, user.id)
        if not habit:
            raise HabitNotFoundException(habit_id)
        return habit

    def create_habit(self, user: User, habit_data: HabitCreate) -> Habit:
        """Create a new habit owned by user"""
        habit = Habit(**habit_data.model_dump(), user_id=user.id)
        habit = self.habit_repo.create(self.db, habit)
        logger.info(f"User {user.id} created habit {habit.id} ({habit.name!r})")
        return habit

    def update_habit(self, user: User, habit_id: int, habit_update: HabitUpdate) -> Habit:
        """Patch descriptive fields of a habit. Streak fields are not writable here."""
        habit = self.get_habit(user, habit_id)

        update_data = habit_update.model_dump(exclude_unset=True)
        for key, value in update_data.items():
            if value is None:
                continue
            setattr(habit, key, value)

        return self.habit_repo.update(self.db, habit)

    def delete_habit(self, user: User, habit_id: int) -> None:
        """
        Delete a habit with its logs and goals.

        Owners may delete their own habits, admins may delete any habit.
        """
        if user.role == ROLE_ADMIN:
            habit = self.habit_repo.get_by_id(self.db, habit_id)
        else:
            habit = self.habit_repo.get_for_user(self.db, habit_id, user.id)
        if not habit:
            raise HabitNotFoundException(habit_id)

        logs_deleted = self.log_repo.delete_for_habit(self.db, habit.id)
        goals_deleted = self.goal_repo.delete_for_habit(self.db, habit.id)
        self.habit_repo.delete(self.db, habit)
        logger.info(
            f"User {user.id} deleted habit {habit_id} "
            f"({logs_deleted} logs, {goals_deleted} goals removed)"
        )

    def set_day_status(
        self,
        user: User,
        habit_id: int,
        day: str,
        completed: bool,
        note: Optional[str] = None,
        mood: Optional[str] = None
    ) -> Habit:
        """
        Mark a weekday done or not done and recount the streak.

        The streak is the number of days marked done in the weekly map,
        recomputed from scratch on every call. longest_streak only ever grows.

        Checking a day appends a completion log. Unchecking removes one log
        of this habit created today (since local midnight); logs from earlier
        days are left alone.

        Args:
            user: Habit owner
            habit_id: Habit to update
            day: Weekday abbreviation ("Mon".."Sun")
            completed: New status for the day
            note: Optional note stored on the completion log
            mood: Optional mood stored on the completion log

        Returns:
            Updated habit

        Raises:
            InvalidInputException: day or mood is not a valid value
            HabitNotFoundException: habit does not exist or is not the user's
        """
        if not self.date_service.is_valid_weekday(day):
            raise InvalidInputException("day", "Invalid day provided")
        if mood is not None and mood not in LOG_MOODS:
            raise InvalidInputException("mood", f"Invalid mood: {mood}")

        habit = self.get_habit(user, habit_id)

        # Reassign so the JSON column is flagged dirty
        weekly_status = {d: bool((habit.weekly_status or {}).get(d, False)) for d in WEEKDAYS}
        weekly_status[day] = bool(completed)
        habit.weekly_status = weekly_status
        habit.recalculate_streak()

        habit = self.habit_repo.update(self.db, habit)

        if completed:
            self.log_repo.create(self.db, Log(
                user_id=user.id,
                habit_id=habit.id,
                note=note or "",
                mood=mood or ""
            ))
        else:
            today_log = self.log_repo.get_latest_since(
                self.db, user.id, habit.id, self.date_service.get_today_start()
            )
            if today_log:
                self.log_repo.delete(self.db, today_log)

        logger.info(
            f"User {user.id} set habit {habit.id} {day}={bool(completed)} "
            f"(streak={habit.streak}, longest={habit.longest_streak})"
        )
        return habit

    def get_logs(self, user: User, habit_id: int, limit: int = 100) -> List[Log]:
        """Get completion logs of one of the user's habits, newest first"""
        habit = self.get_habit(user, habit_id)
        return self.log_repo.get_for_habit(self.db, habit.id, limit)

    def get_stats(self, user: User) -> dict:
        """Summary statistics over the user's active habits"""
        habits = self.habit_repo.get_all_for_user(self.db, user.id, is_active=True)
        today = self.date_service.get_weekday()

        total_habits = len(habits)
        completed_today = sum(1 for h in habits if (h.weekly_status or {}).get(today))

        if total_habits:
            average_streak = round(sum(h.streak or 0 for h in habits) / total_habits, 1)
            completion_rate = round(completed_today / total_habits * 100)
        else:
            average_streak = 0.0
            completion_rate = 0

        return {
            "total_habits": total_habits,
            "total_completed_today": completed_today,
            "completion_rate_today": completion_rate,
            "average_streak": average_streak,
            "longest_streak": max((h.longest_streak or 0 for h in habits), default=0),
        }
