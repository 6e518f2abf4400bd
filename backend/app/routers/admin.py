"""
API endpoints for the admin panel.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import require_admin
from app.schemas import AdminStats
from app.services.admin_service import admin_service

router = APIRouter()


@router.get("/stats", response_model=AdminStats)
async def get_dashboard_stats(
    db: Session = Depends(get_db),
    admin=Depends(require_admin),
):
    """Catalog counts for the admin dashboard."""
    return admin_service.dashboard_stats(db)
