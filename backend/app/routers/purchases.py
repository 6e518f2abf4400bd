"""
API endpoints for purchase history and savings statistics.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_user
from app.models.user import User
from app.schemas import PurchaseCreate, PurchaseResponse, SavingsStatsResponse
from app.services.product_service import product_service
from app.services.purchase_service import purchase_service

router = APIRouter()


@router.get("", response_model=List[PurchaseResponse])
async def list_purchases(
    db: Session = Depends(get_db), current_user: User = Depends(get_current_user)
):
    """Purchase history, most recent first."""
    return purchase_service.list_purchases(db, current_user.id)


@router.get("/stats", response_model=SavingsStatsResponse)
async def get_savings_stats(
    db: Session = Depends(get_db), current_user: User = Depends(get_current_user)
):
    """Totals plus savings grouped by category and by month."""
    return purchase_service.savings_stats(db, current_user.id)


@router.post("", response_model=PurchaseResponse, status_code=status.HTTP_201_CREATED)
async def record_purchase(
    purchase: PurchaseCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Mark a product as purchased at its current price."""
    product = product_service.get_product(db, purchase.product_id)
    return purchase_service.record_product_purchase(db, current_user.id, product)


@router.delete("/{purchase_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_purchase(
    purchase_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    purchase_service.remove_purchase(db, current_user.id, purchase_id)
