"""
Application-wide constants and configuration defaults.
"""
import os

# Weekdays, in the order the weekly status map is presented
WEEKDAYS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

# Habit categories
HABIT_CATEGORIES = [
    "health", "fitness", "mindfulness", "learning", "productivity", "social", "other"
]
DEFAULT_HABIT_CATEGORY = "other"

# Habit frequency
FREQUENCY_DAILY = "daily"
FREQUENCY_WEEKLY = "weekly"
HABIT_FREQUENCIES = [FREQUENCY_DAILY, FREQUENCY_WEEKLY]

DEFAULT_HABIT_COLOR = "#6366f1"
DEFAULT_HABIT_ICON = "⭐"

# Log moods ("" means no mood given)
LOG_MOODS = ["great", "good", "neutral", "bad", "terrible", ""]

# User roles
ROLE_USER = "user"
ROLE_ADMIN = "admin"
USER_ROLES = [ROLE_USER, ROLE_ADMIN]

# Seeded categories: (name, icon, color, description)
DEFAULT_CATEGORIES = [
    ("health", "❤️", "#ef4444", "Sleep, nutrition and general wellbeing"),
    ("fitness", "💪", "#f97316", "Exercise and physical activity"),
    ("mindfulness", "🧘", "#8b5cf6", "Meditation, journaling and reflection"),
    ("learning", "📚", "#3b82f6", "Reading, courses and new skills"),
    ("productivity", "⚡", "#eab308", "Work habits and focus"),
    ("social", "🤝", "#10b981", "Family, friends and community"),
    ("other", "📁", "#6366f1", "Everything else"),
]

# Database
DEFAULT_DATABASE_URL = "sqlite:///./habitflow.db"

# Auth
DEFAULT_JWT_SECRET = "dev-secret-change-me"
JWT_ALGORITHM = "HS256"
DEFAULT_JWT_EXPIRE_DAYS = 30

# Logging
DEFAULT_LOG_DIRECTORY_PROD = "/var/log/habitflow"
DEFAULT_LOG_DIRECTORY_DEV = "./logs"

# Scheduler
DEFAULT_GOAL_RECHECK_MINUTES = 15

# CORS
CORS_ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv("HABITFLOW_CORS_ORIGINS", "*").split(",")
    if origin.strip()
]
