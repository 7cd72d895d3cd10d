"""
Goal management service.
Handles streak goals and their one-way pending -> completed transition.

Completion is pull-based: a goal completes at creation if its habit's streak
already meets the target, on an explicit recheck, or on an explicit update.
Checking a habit never completes goals by itself.
"""
import logging
from typing import List, Optional
from sqlalchemy.orm import Session

from habitflow.models import Goal, User
from habitflow.schemas import GoalCreate, GoalUpdate
from habitflow.repositories.goal_repository import GoalRepository
from habitflow.repositories.habit_repository import HabitRepository
from habitflow.repositories.user_repository import UserRepository
from habitflow.exceptions import (
    ConflictException, GoalNotFoundException, HabitNotFoundException
)

logger = logging.getLogger("habitflow.goals")


class GoalService:
    """Service for managing streak goals"""

    def __init__(self, db: Session):
        self.db = db
        self.goal_repo = GoalRepository()
        self.habit_repo = HabitRepository()
        self.user_repo = UserRepository()

    def get_goals(self, user: User, completed: Optional[bool] = None) -> List[Goal]:
        """Get user's goals, newest first"""
        return self.goal_repo.get_all_for_user(self.db, user.id, completed)

    def get_goal(self, user: User, goal_id: int) -> Goal:
        """Get one of the user's goals"""
        goal = self.goal_repo.get_for_user(self.db, goal_id, user.id)
        if not goal:
            raise GoalNotFoundException(goal_id)
        return goal

    def create_goal(self, user: User, goal_data: GoalCreate) -> Goal:
        """
        Create a goal for one of the user's habits.

        Raises:
            HabitNotFoundException: habit is not the user's
            ConflictException: the habit already has an active goal
        """
        habit = self.habit_repo.get_for_user(self.db, goal_data.habit_id, user.id)
        if not habit:
            raise HabitNotFoundException(goal_data.habit_id)

        if self.goal_repo.get_active_for_habit(self.db, user.id, habit.id):
            raise ConflictException(
                "This habit already has an active goal. Complete or delete it first."
            )

        goal = Goal(
            user_id=user.id,
            habit_id=habit.id,
            title=goal_data.title,
            target_streak=goal_data.target_streak,
            target_date=goal_data.target_date,
            reward=goal_data.reward or "",
        )

        # Streak may already be at target
        if (habit.streak or 0) >= goal.target_streak:
            goal.mark_completed()
            logger.info(f"Goal for habit {habit.id} created already completed (streak={habit.streak})")

        goal = self.goal_repo.create(self.db, goal)
        logger.info(f"User {user.id} created goal {goal.id} for habit {habit.id}")
        return goal

    def update_goal(self, user: User, goal_id: int, goal_update: GoalUpdate) -> Goal:
        """
        Patch a goal.

        is_completed=True completes the goal the first time only;
        is_completed=False is ignored since completion cannot be undone.
        """
        goal = self.get_goal(user, goal_id)

        update_data = goal_update.model_dump(exclude_unset=True)
        is_completed = update_data.pop("is_completed", None)
        for key, value in update_data.items():
            if value is None and key != "target_date":
                continue
            setattr(goal, key, value)

        if is_completed is True and goal.mark_completed():
            logger.info(f"User {user.id} completed goal {goal.id}")

        return self.goal_repo.update(self.db, goal)

    def delete_goal(self, user: User, goal_id: int) -> None:
        """Delete one of the user's goals"""
        goal = self.get_goal(user, goal_id)
        self.goal_repo.delete(self.db, goal)
        logger.info(f"User {user.id} deleted goal {goal_id}")

    def recheck_goals(self, user: User) -> int:
        """
        Complete every pending goal whose habit streak reached the target.

        Returns:
            Number of goals completed by this call
        """
        pending = self.goal_repo.get_all_for_user(self.db, user.id, completed=False)

        completed_count = 0
        for goal in pending:
            habit = goal.habit
            if habit is not None and (habit.streak or 0) >= goal.target_streak:
                goal.mark_completed()
                self.goal_repo.update(self.db, goal)
                completed_count += 1

        if completed_count:
            logger.info(f"Recheck completed {completed_count} goal(s) for user {user.id}")
        return completed_count

    def recheck_all_goals(self) -> int:
        """Run recheck_goals for every user with pending goals"""
        total = 0
        for user_id in self.goal_repo.get_pending_user_ids(self.db):
            user = self.user_repo.get_by_id(self.db, user_id)
            if user:
                total += self.recheck_goals(user)
        return total
