"""
Custom exceptions for the habit tracker application.
Services raise these; route handlers translate them into HTTP responses.
"""


class HabitFlowException(Exception):
    """Base exception for habit tracker application"""
    pass


class InvalidInputException(HabitFlowException):
    """Raised when a request value is malformed (bad day, bad mood, ...)"""
    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(message)


class NotFoundException(HabitFlowException):
    """Base for lookups that miss or are not visible to the caller"""
    pass


class HabitNotFoundException(NotFoundException):
    """Raised when a habit is not found for the caller"""
    def __init__(self, habit_id: int):
        self.habit_id = habit_id
        super().__init__("Habit not found")


class GoalNotFoundException(NotFoundException):
    """Raised when a goal is not found for the caller"""
    def __init__(self, goal_id: int):
        self.goal_id = goal_id
        super().__init__("Goal not found")


class UserNotFoundException(NotFoundException):
    """Raised when a user is not found"""
    def __init__(self, user_id):
        self.user_id = user_id
        super().__init__("User not found")


class ConflictException(HabitFlowException):
    """Raised when a write would violate a uniqueness rule"""
    def __init__(self, message: str):
        super().__init__(message)


class ConcurrentUpdateException(ConflictException):
    """Raised when a record was modified by another request mid-update"""
    def __init__(self, resource: str, resource_id: int):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(
            f"{resource} {resource_id} was modified by another request, please retry"
        )


class ForbiddenActionException(HabitFlowException):
    """Raised when an otherwise valid request is not allowed (e.g. changing own role)"""
    def __init__(self, message: str):
        super().__init__(message)


class AuthenticationException(HabitFlowException):
    """Raised when credentials are invalid"""
    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)
