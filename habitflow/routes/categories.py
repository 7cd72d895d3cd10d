"""
Category HTTP routes.
"""
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from habitflow.auth import get_current_user
from habitflow.database import get_db
from habitflow.schemas import CategoryResponse
from habitflow.services.category_service import CategoryService

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("", response_model=List[CategoryResponse], dependencies=[Depends(get_current_user)])
def get_categories(db: Session = Depends(get_db)):
    """Get habit categories"""
    return CategoryService(db).get_categories()
