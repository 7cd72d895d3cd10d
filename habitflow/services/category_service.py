"""
Category service - reference list of habit categories.
"""
import logging
from typing import List
from sqlalchemy.orm import Session

from habitflow.models import Category
from habitflow.repositories.user_repository import CategoryRepository
from habitflow.constants import DEFAULT_CATEGORIES

logger = logging.getLogger("habitflow.categories")


class CategoryService:
    """Service for habit categories"""

    def __init__(self, db: Session):
        self.db = db
        self.category_repo = CategoryRepository()

    def get_categories(self) -> List[Category]:
        return self.category_repo.get_all(self.db)

    def seed_defaults(self) -> int:
        """Insert any missing default categories. Returns how many were added."""
        added = 0
        for name, icon, color, description in DEFAULT_CATEGORIES:
            if self.category_repo.get_by_name(self.db, name):
                continue
            self.category_repo.create(self.db, Category(
                name=name,
                icon=icon,
                color=color,
                description=description,
                is_default=True,
            ))
            added += 1
        if added:
            logger.info(f"Seeded {added} default categories")
        return added
