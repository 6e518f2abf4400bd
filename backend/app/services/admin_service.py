"""
Administrator checks and the admin dashboard figures.
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import settings
from app.models.category import Category
from app.models.product import Product
from app.models.user import User

logger = logging.getLogger(__name__)

RECENT_PRODUCT_DAYS = 7


class AdminService:
    def is_admin(self, db: Session, user_id: int) -> bool:
        """Lookup failures are reported as "not an admin"."""
        try:
            user = db.get(User, user_id)
        except SQLAlchemyError as e:
            logger.error(f"Error checking admin status for user {user_id}: {e}")
            return False
        return bool(user and user.is_superuser)

    def grant_admin(self, db: Session, email: str) -> Optional[User]:
        user = db.query(User).filter(User.email == email).first()
        if user is None:
            return None
        user.is_superuser = True
        db.commit()
        logger.info(f"Granted administrator rights to {email}")
        return user

    def promote_configured_admins(self, db: Session) -> int:
        """Promote existing users listed in ADMIN_EMAILS. Returns how many changed."""
        if not settings.ADMIN_EMAILS:
            return 0
        users = [
            user
            for user in db.query(User).filter(User.email.in_(settings.ADMIN_EMAILS)).all()
            if not user.is_superuser
        ]
        for user in users:
            user.is_superuser = True
        db.commit()
        if users:
            logger.info(f"Promoted {len(users)} configured administrator(s)")
        return len(users)

    def dashboard_stats(self, db: Session, now: datetime | None = None) -> Dict[str, Any]:
        since = (now or datetime.utcnow()) - timedelta(days=RECENT_PRODUCT_DAYS)
        categories = db.query(Category).all()
        return {
            "total_products": db.query(Product).count(),
            "total_categories": len(categories),
            "total_subcategories": sum(len(c.subcategories or []) for c in categories),
            "recent_products": db.query(Product).filter(Product.created_at > since).count(),
        }


admin_service = AdminService()
