from sqlalchemy import Column, Integer, String, Boolean, DateTime, JSON, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime

from habitflow.database import Base
from habitflow.constants import (
    WEEKDAYS, DEFAULT_HABIT_CATEGORY, FREQUENCY_DAILY,
    DEFAULT_HABIT_COLOR, DEFAULT_HABIT_ICON, ROLE_USER
)


def empty_weekly_status() -> dict:
    return {day: False for day in WEEKDAYS}


def all_weekdays() -> list:
    return list(WEEKDAYS)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(30), nullable=False, unique=True, index=True)
    email = Column(String, nullable=False, unique=True, index=True)  # stored lowercased
    password_hash = Column(String, nullable=False)
    role = Column(String, default=ROLE_USER)  # user, admin
    avatar = Column(String, default="")
    bio = Column(String(200), default="")
    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)


class Habit(Base):
    __tablename__ = "habits"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    description = Column(String(500), default="")
    category = Column(String, default=DEFAULT_HABIT_CATEGORY)
    frequency = Column(String, default=FREQUENCY_DAILY)  # daily, weekly
    target_days = Column(JSON, default=all_weekdays)     # e.g. ["Mon", "Wed", "Fri"]
    color = Column(String, default=DEFAULT_HABIT_COLOR)
    icon = Column(String, default=DEFAULT_HABIT_ICON)
    is_active = Column(Boolean, default=True)

    # Streak tracking
    streak = Column(Integer, default=0)          # Days marked done in weekly_status
    longest_streak = Column(Integer, default=0)  # High-water mark of streak
    weekly_status = Column(JSON, default=empty_weekly_status)  # {"Mon": bool, ..., "Sun": bool}
    last_reset_date = Column(DateTime, default=datetime.now)

    # Optimistic concurrency counter, managed by the mapper
    version = Column(Integer, nullable=False)

    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)

    __mapper_args__ = {"version_id_col": version}

    def recalculate_streak(self) -> int:
        """Recount streak from the weekly map and raise longest_streak if needed"""
        completed_days = sum(1 for day in WEEKDAYS if (self.weekly_status or {}).get(day))
        self.streak = completed_days
        if completed_days > (self.longest_streak or 0):
            self.longest_streak = completed_days
        return completed_days


class Goal(Base):
    __tablename__ = "goals"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    habit_id = Column(Integer, ForeignKey("habits.id"), nullable=False, index=True)
    title = Column(String(100), nullable=False)
    target_streak = Column(Integer, nullable=False)
    target_date = Column(DateTime, nullable=True)
    is_completed = Column(Boolean, default=False)
    completed_at = Column(DateTime, nullable=True)
    reward = Column(String(200), default="")  # What you'll reward yourself with

    version = Column(Integer, nullable=False)

    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)

    habit = relationship("Habit", lazy="joined")

    __mapper_args__ = {"version_id_col": version}

    def mark_completed(self) -> bool:
        """Complete the goal once. Returns False if it was already completed."""
        if self.is_completed:
            return False
        self.is_completed = True
        self.completed_at = datetime.now()
        return True


class Log(Base):
    __tablename__ = "logs"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    habit_id = Column(Integer, ForeignKey("habits.id"), nullable=False, index=True)
    completed_at = Column(DateTime, default=datetime.now, index=True)  # Local server time
    note = Column(String(300), default="")
    mood = Column(String, default="")  # great, good, neutral, bad, terrible or empty
    created_at = Column(DateTime, default=datetime.now)


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, unique=True)
    icon = Column(String, default="📁")
    color = Column(String, default=DEFAULT_HABIT_COLOR)
    description = Column(String, default="")
    is_default = Column(Boolean, default=False)
    created_at = Column(DateTime, default=datetime.now)
