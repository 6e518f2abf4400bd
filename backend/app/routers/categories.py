"""
API endpoints for categories and subcategories.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import require_admin
from app.schemas import CategoryCreate, CategoryResponse, CategoryUpdate, SubcategoryRequest
from app.services.category_service import category_service

router = APIRouter()


@router.get("", response_model=List[CategoryResponse])
async def list_categories(db: Session = Depends(get_db)):
    """List all categories by name."""
    return category_service.list_categories(db)


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    category: CategoryCreate,
    db: Session = Depends(get_db),
    admin=Depends(require_admin),
):
    return category_service.create_category(db, category.name, category.icon)


@router.patch("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: int,
    patch: CategoryUpdate,
    db: Session = Depends(get_db),
    admin=Depends(require_admin),
):
    return category_service.update_category(db, category_id, patch)


@router.post("/{category_id}/subcategories", response_model=CategoryResponse)
async def add_subcategory(
    category_id: int,
    subcategory: SubcategoryRequest,
    db: Session = Depends(get_db),
    admin=Depends(require_admin),
):
    return category_service.add_subcategory(db, category_id, subcategory.name)


@router.delete("/{category_id}/subcategories/{name}", response_model=CategoryResponse)
async def remove_subcategory(
    category_id: int,
    name: str,
    db: Session = Depends(get_db),
    admin=Depends(require_admin),
):
    return category_service.remove_subcategory(db, category_id, name)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: int,
    db: Session = Depends(get_db),
    admin=Depends(require_admin),
):
    category_service.delete_category(db, category_id)
