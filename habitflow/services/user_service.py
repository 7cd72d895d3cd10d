"""
User management service.
Handles registration, login, profiles and admin account management.
"""
import logging
from typing import List, Tuple
from sqlalchemy.orm import Session

from habitflow.auth import create_access_token, hash_password, verify_password
from habitflow.models import User
from habitflow.schemas import RegisterRequest, ProfileUpdate
from habitflow.repositories.user_repository import UserRepository
from habitflow.repositories.habit_repository import HabitRepository, LogRepository
from habitflow.repositories.goal_repository import GoalRepository
from habitflow.exceptions import (
    AuthenticationException, ConflictException, ForbiddenActionException,
    InvalidInputException, UserNotFoundException
)
from habitflow.constants import ROLE_ADMIN, ROLE_USER, USER_ROLES

logger = logging.getLogger("habitflow.users")


class UserService:
    """Service for user accounts"""

    def __init__(self, db: Session):
        self.db = db
        self.user_repo = UserRepository()
        self.habit_repo = HabitRepository()
        self.log_repo = LogRepository()
        self.goal_repo = GoalRepository()

    def register(self, data: RegisterRequest, role: str = ROLE_USER) -> Tuple[User, str]:
        """
        Create an account and issue a token for it.

        Raises:
            ConflictException: email or username already taken
        """
        if self.user_repo.get_by_email(self.db, data.email):
            raise ConflictException("Email already registered")
        if self.user_repo.get_by_username(self.db, data.username):
            raise ConflictException("Username already taken")

        user = User(
            username=data.username,
            email=data.email.lower(),
            password_hash=hash_password(data.password),
            role=role,
        )
        user = self.user_repo.create(self.db, user)
        logger.info(f"Registered user {user.id} ({user.username}) with role {user.role}")
        return user, create_access_token(user)

    def login(self, email: str, password: str) -> Tuple[User, str]:
        """
        Verify credentials and issue a token.

        Raises:
            AuthenticationException: unknown email or wrong password
        """
        user = self.user_repo.get_by_email(self.db, email)
        if not user or not verify_password(password, user.password_hash):
            logger.warning(f"Failed login attempt for {email}")
            raise AuthenticationException()
        return user, create_access_token(user)

    def get_profile(self, user: User) -> dict:
        """User fields plus the number of active habits"""
        return {
            "id": user.id,
            "username": user.username,
            "email": user.email,
            "role": user.role,
            "avatar": user.avatar or "",
            "bio": user.bio or "",
            "created_at": user.created_at,
            "habit_count": self.habit_repo.count_active_for_user(self.db, user.id),
        }

    def update_profile(self, user: User, data: ProfileUpdate) -> User:
        """
        Update the caller's profile.

        Raises:
            ConflictException: new email or username belongs to another user
        """
        if data.email:
            existing = self.user_repo.get_by_email(self.db, data.email)
            if existing and existing.id != user.id:
                raise ConflictException("Email already in use")
            user.email = data.email.lower()
        if data.username:
            existing = self.user_repo.get_by_username(self.db, data.username)
            if existing and existing.id != user.id:
                raise ConflictException("Username already taken")
            user.username = data.username
        if data.bio is not None:
            user.bio = data.bio
        if data.avatar is not None:
            user.avatar = data.avatar

        return self.user_repo.update(self.db, user)

    def get_all_users(self) -> List[User]:
        """All users, newest first"""
        return self.user_repo.get_all(self.db)

    def update_role(self, admin: User, user_id: int, role: str) -> User:
        """
        Change another user's role.

        Raises:
            InvalidInputException: role is not "user" or "admin"
            ForbiddenActionException: admin tried to change their own role
            UserNotFoundException: no such user
        """
        if role not in USER_ROLES:
            raise InvalidInputException("role", 'Role must be "user" or "admin"')
        if user_id == admin.id:
            raise ForbiddenActionException("You cannot change your own role")

        user = self.user_repo.get_by_id(self.db, user_id)
        if not user:
            raise UserNotFoundException(user_id)

        user.role = role
        user = self.user_repo.update(self.db, user)
        logger.info(f"Admin {admin.id} set role of user {user.id} to {role}")
        return user

    def delete_user(self, admin: User, user_id: int) -> None:
        """
        Delete a user together with their habits, logs and goals.

        Raises:
            ForbiddenActionException: admin tried to delete themselves
            UserNotFoundException: no such user
        """
        if user_id == admin.id:
            raise ForbiddenActionException("You cannot delete your own account")

        user = self.user_repo.get_by_id(self.db, user_id)
        if not user:
            raise UserNotFoundException(user_id)

        self.log_repo.delete_for_user(self.db, user.id)
        self.goal_repo.delete_for_user(self.db, user.id)
        self.habit_repo.delete_for_user(self.db, user.id)
        self.user_repo.delete(self.db, user)
        logger.info(f"Admin {admin.id} deleted user {user_id}")

    def promote_to_admin(self, email: str) -> User:
        """Give an existing user the admin role"""
        user = self.user_repo.get_by_email(self.db, email)
        if not user:
            raise UserNotFoundException(email)
        user.role = ROLE_ADMIN
        user = self.user_repo.update(self.db, user)
        logger.info(f"Promoted user {user.id} ({email}) to admin")
        return user
