"""
Product catalog operations, including product image handling.
"""

import logging
from typing import List, NamedTuple, Optional

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.product import Product
from app.schemas import ProductForm
from app.services.storage_service import LocalImageStorage

logger = logging.getLogger(__name__)


class ImageUpload(NamedTuple):
    filename: str
    content: bytes


class ProductService:
    def list_products(self, db: Session) -> List[Product]:
        """Whole catalog, newest first."""
        return (
            db.query(Product)
            .order_by(Product.created_at.desc(), Product.id.desc())
            .all()
        )

    def get_product(self, db: Session, product_id: int) -> Product:
        product = db.get(Product, product_id)
        if not product:
            raise HTTPException(status_code=404, detail="Product not found")
        return product

    def create_product(
        self,
        db: Session,
        storage: LocalImageStorage,
        form: ProductForm,
        image: Optional[ImageUpload] = None,
    ) -> Product:
        """
        Upload the image (if any), then write the record referencing its URL.

        If the record write fails the uploaded image is left in storage.
        """
        image_url = ""
        if image:
            image_url = storage.upload(image.filename, image.content)

        product = Product(**form.model_dump(), image_url=image_url)
        db.add(product)
        self._commit(db, "create product")
        db.refresh(product)
        logger.info(f"Created product {product.id} ({product.name})")
        return product

    def update_product(
        self,
        db: Session,
        storage: LocalImageStorage,
        product_id: int,
        form: ProductForm,
        image: Optional[ImageUpload] = None,
    ) -> Product:
        """Overwrite the product's fields; a new image replaces and deletes the old one."""
        product = self.get_product(db, product_id)

        if image:
            previous_url = product.image_url
            product.image_url = storage.upload(image.filename, image.content)
            if previous_url:
                storage.delete(previous_url)

        for field, value in form.model_dump().items():
            setattr(product, field, value)

        self._commit(db, "update product")
        db.refresh(product)
        logger.info(f"Updated product {product.id}")
        return product

    def delete_product(
        self, db: Session, storage: LocalImageStorage, product_id: int
    ) -> None:
        """Delete the product's image first, then the record."""
        product = self.get_product(db, product_id)
        if product.image_url:
            storage.delete(product.image_url)

        db.delete(product)
        self._commit(db, "delete product")
        logger.info(f"Deleted product {product_id}")

    def _commit(self, db: Session, action: str) -> None:
        try:
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to {action}: {e}")
            raise


product_service = ProductService()
