"""
API endpoints for the signed-in user's favorites.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_user
from app.models.user import User
from app.schemas import FavoriteState, ProductResponse
from app.services.favorites_service import favorites_service
from app.services.product_service import product_service

router = APIRouter()


@router.get("", response_model=List[int])
async def list_favorites(
    db: Session = Depends(get_db), current_user: User = Depends(get_current_user)
):
    """Ids of the favorited products."""
    return favorites_service.list_favorites(db, current_user.id)


@router.get("/products", response_model=List[ProductResponse])
async def list_favorite_products(
    db: Session = Depends(get_db), current_user: User = Depends(get_current_user)
):
    return favorites_service.favorite_products(db, current_user.id)


@router.put("/{product_id}", response_model=FavoriteState)
async def add_favorite(
    product_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    product_service.get_product(db, product_id)
    favorites_service.add_favorite(db, current_user.id, product_id)
    return FavoriteState(product_id=product_id, is_favorite=True)


@router.delete("/{product_id}", response_model=FavoriteState)
async def remove_favorite(
    product_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    favorites_service.remove_favorite(db, current_user.id, product_id)
    return FavoriteState(product_id=product_id, is_favorite=False)


@router.post("/{product_id}/toggle", response_model=FavoriteState)
async def toggle_favorite(
    product_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Flip membership; the response carries the stored state."""
    if not favorites_service.is_favorite(db, current_user.id, product_id):
        product_service.get_product(db, product_id)
    is_favorite = favorites_service.toggle_favorite(db, current_user.id, product_id)
    return FavoriteState(product_id=product_id, is_favorite=is_favorite)
