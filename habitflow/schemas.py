from pydantic import BaseModel, EmailStr, Field, field_validator
from datetime import datetime
from typing import Dict, List, Optional

from habitflow.constants import WEEKDAYS, HABIT_CATEGORIES, HABIT_FREQUENCIES, USER_ROLES

CATEGORY_PATTERN = "^(" + "|".join(HABIT_CATEGORIES) + ")$"
FREQUENCY_PATTERN = "^(" + "|".join(HABIT_FREQUENCIES) + ")$"
ROLE_PATTERN = "^(" + "|".join(USER_ROLES) + ")$"


def _check_weekdays(days: Optional[List[str]]) -> Optional[List[str]]:
    if days is None:
        return days
    invalid = [d for d in days if d not in WEEKDAYS]
    if invalid:
        raise ValueError(f"Invalid weekday(s): {', '.join(invalid)}")
    return days


# Auth / user schemas
class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=30)
    email: EmailStr
    password: str = Field(..., min_length=6)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    id: int
    username: str
    email: str
    role: str
    avatar: str = ""
    bio: str = ""
    created_at: datetime

    class Config:
        from_attributes = True


class ProfileResponse(UserResponse):
    habit_count: int = 0


class AuthResponse(BaseModel):
    token: str
    user: UserResponse


class ProfileUpdate(BaseModel):
    username: Optional[str] = Field(None, min_length=3, max_length=30)
    email: Optional[EmailStr] = None
    bio: Optional[str] = Field(None, max_length=200)
    avatar: Optional[str] = None


class RoleUpdate(BaseModel):
    role: str = Field(..., pattern=ROLE_PATTERN)


# Habit schemas
class HabitBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field(default="", max_length=500)
    category: str = Field(default="other", pattern=CATEGORY_PATTERN)
    frequency: str = Field(default="daily", pattern=FREQUENCY_PATTERN)
    target_days: List[str] = Field(default_factory=lambda: list(WEEKDAYS))
    color: str = "#6366f1"
    icon: str = "⭐"

    @field_validator("target_days")
    @classmethod
    def validate_target_days(cls, days):
        return _check_weekdays(days)


class HabitCreate(HabitBase):
    pass


class HabitUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    category: Optional[str] = Field(None, pattern=CATEGORY_PATTERN)
    frequency: Optional[str] = Field(None, pattern=FREQUENCY_PATTERN)
    target_days: Optional[List[str]] = None
    color: Optional[str] = None
    icon: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("target_days")
    @classmethod
    def validate_target_days(cls, days):
        return _check_weekdays(days)


class HabitResponse(HabitBase):
    id: int
    user_id: int
    streak: int = 0
    longest_streak: int = 0
    weekly_status: Dict[str, bool]
    is_active: bool = True
    last_reset_date: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class HabitCheck(BaseModel):
    # day and mood are validated by the service so bad values map to 400
    day: str
    completed: bool
    note: Optional[str] = Field(None, max_length=300)
    mood: Optional[str] = None


class HabitStatsResponse(BaseModel):
    total_habits: int
    total_completed_today: int
    completion_rate_today: int  # Percent, rounded
    average_streak: float
    longest_streak: int


class LogResponse(BaseModel):
    id: int
    user_id: int
    habit_id: int
    completed_at: datetime
    note: str = ""
    mood: str = ""

    class Config:
        from_attributes = True


# Goal schemas
class GoalHabitSummary(BaseModel):
    id: int
    name: str
    icon: str
    color: str
    streak: int
    category: str

    class Config:
        from_attributes = True


class GoalCreate(BaseModel):
    habit_id: int
    title: str = Field(..., min_length=1, max_length=100)
    target_streak: int = Field(..., ge=1)
    target_date: Optional[datetime] = None
    reward: str = Field(default="", max_length=200)


class GoalUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=100)
    target_streak: Optional[int] = Field(None, ge=1)
    target_date: Optional[datetime] = None
    reward: Optional[str] = Field(None, max_length=200)
    is_completed: Optional[bool] = None


class GoalResponse(BaseModel):
    id: int
    user_id: int
    habit_id: int
    title: str
    target_streak: int
    target_date: Optional[datetime] = None
    is_completed: bool
    completed_at: Optional[datetime] = None
    reward: str = ""
    created_at: datetime
    habit: Optional[GoalHabitSummary] = None

    class Config:
        from_attributes = True


class GoalCheckResponse(BaseModel):
    completed_count: int
    message: str


# Category schemas
class CategoryResponse(BaseModel):
    id: int
    name: str
    icon: str
    color: str
    description: str = ""
    is_default: bool = False

    class Config:
        from_attributes = True
