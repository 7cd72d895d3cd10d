"""
User repository - Data access layer for User and Category models.
"""
from typing import List, Optional
from sqlalchemy.orm import Session

from habitflow.models import User, Category


class UserRepository:
    """Repository for User data access"""

    @staticmethod
    def get_by_id(db: Session, user_id: int) -> Optional[User]:
        """Get user by ID"""
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def get_by_email(db: Session, email: str) -> Optional[User]:
        """Get user by email (case-insensitive, emails are stored lowercased)"""
        return db.query(User).filter(User.email == email.lower()).first()

    @staticmethod
    def get_by_username(db: Session, username: str) -> Optional[User]:
        """Get user by username"""
        return db.query(User).filter(User.username == username).first()

    @staticmethod
    def get_all(db: Session) -> List[User]:
        """Get all users, newest first"""
        return db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()

    @staticmethod
    def create(db: Session, user: User) -> User:
        """Create new user"""
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def update(db: Session, user: User) -> User:
        """Update existing user"""
        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def delete(db: Session, user: User) -> None:
        """Delete a user (and commit anything else pending in the session)"""
        db.delete(user)
        db.commit()


class CategoryRepository:
    """Repository for Category data access"""

    @staticmethod
    def get_all(db: Session) -> List[Category]:
        """Get all categories"""
        return db.query(Category).order_by(Category.id).all()

    @staticmethod
    def get_by_name(db: Session, name: str) -> Optional[Category]:
        """Get category by name"""
        return db.query(Category).filter(Category.name == name).first()

    @staticmethod
    def create(db: Session, category: Category) -> Category:
        """Create new category"""
        db.add(category)
        db.commit()
        db.refresh(category)
        return category
