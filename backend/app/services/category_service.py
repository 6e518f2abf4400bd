"""
Category and subcategory management.
"""

import logging
from typing import List

from fastapi import HTTPException
from sqlalchemy.orm import Session

from app.models.category import Category
from app.schemas import CategoryUpdate

logger = logging.getLogger(__name__)


class CategoryService:
    def list_categories(self, db: Session) -> List[Category]:
        return db.query(Category).order_by(Category.name.asc()).all()

    def get_category(self, db: Session, category_id: int) -> Category:
        category = db.get(Category, category_id)
        if not category:
            raise HTTPException(status_code=404, detail="Category not found")
        return category

    def _ensure_name_free(self, db: Session, name: str, category_id: int | None = None):
        query = db.query(Category).filter(Category.name == name)
        if category_id is not None:
            query = query.filter(Category.id != category_id)
        if query.first():
            raise HTTPException(
                status_code=400, detail="Category with this name already exists"
            )

    def create_category(self, db: Session, name: str, icon: str) -> Category:
        self._ensure_name_free(db, name)
        category = Category(name=name, icon=icon, subcategories=[])
        db.add(category)
        db.commit()
        db.refresh(category)
        logger.info(f"Created category {category.id} ({name})")
        return category

    def update_category(
        self, db: Session, category_id: int, patch: CategoryUpdate
    ) -> Category:
        """Apply only the fields present in ``patch``."""
        category = self.get_category(db, category_id)
        changes = patch.model_dump(exclude_unset=True, exclude_none=True)

        if "name" in changes:
            self._ensure_name_free(db, changes["name"], category_id)
        if "subcategories" in changes:
            subcategories = changes["subcategories"]
            if len(set(subcategories)) != len(subcategories):
                raise HTTPException(
                    status_code=400, detail="Subcategories must be unique"
                )

        for field, value in changes.items():
            setattr(category, field, value)

        db.commit()
        db.refresh(category)
        return category

    def add_subcategory(self, db: Session, category_id: int, name: str) -> Category:
        category = self.get_category(db, category_id)
        if name in category.subcategories:
            raise HTTPException(status_code=400, detail="Subcategory already exists")
        return self.update_category(
            db, category_id, CategoryUpdate(subcategories=[*category.subcategories, name])
        )

    def remove_subcategory(self, db: Session, category_id: int, name: str) -> Category:
        category = self.get_category(db, category_id)
        remaining = [s for s in category.subcategories if s != name]
        return self.update_category(
            db, category_id, CategoryUpdate(subcategories=remaining)
        )

    def delete_category(self, db: Session, category_id: int) -> None:
        category = self.get_category(db, category_id)
        db.delete(category)
        db.commit()
        logger.info(f"Deleted category {category_id}")


category_service = CategoryService()
