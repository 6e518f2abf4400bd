"""
API endpoints for the product catalog.
"""

from pathlib import Path
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.dependencies import get_image_storage, require_admin
from app.schemas import ComparisonResponse, ProductForm, ProductResponse
from app.services.catalog_filter import ALL, SavingsTier, filter_products
from app.services.comparison import compare_products, select_comparison
from app.services.product_service import ImageUpload, product_service
from app.services.storage_service import LocalImageStorage

router = APIRouter()


def product_form(
    name: str = Form(""),
    category: str = Form(""),
    subcategory: str = Form(""),
    original_price: float = Form(0.0),
    discount_price: float = Form(0.0),
    cost_per_use: float = Form(0.0),
    usage_unit: str = Form("ml"),
    usage_amount: str = Form(""),
    affiliate_url: str = Form(""),
) -> ProductForm:
    """Build and validate the product form; the first failure is reported."""
    try:
        return ProductForm(
            name=name,
            category=category,
            subcategory=subcategory,
            original_price=original_price,
            discount_price=discount_price,
            cost_per_use=cost_per_use,
            usage_unit=usage_unit,
            usage_amount=usage_amount,
            affiliate_url=affiliate_url,
        )
    except ValidationError as e:
        message = e.errors()[0]["msg"].removeprefix("Value error, ")
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=message)


async def read_image(file: Optional[UploadFile]) -> Optional[ImageUpload]:
    """Validate an uploaded image; None when no file was sent."""
    if file is None or not file.filename:
        return None

    file_ext = Path(file.filename).suffix.lower()
    if file_ext not in settings.ALLOWED_IMAGE_EXTENSIONS:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Invalid image type. Allowed: {', '.join(settings.ALLOWED_IMAGE_EXTENSIONS)}",
        )

    content = await file.read()
    if len(content) > settings.MAX_UPLOAD_SIZE:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Image too large. Max size: {settings.MAX_UPLOAD_SIZE / 1024 / 1024} MB",
        )
    return ImageUpload(file.filename, content)


@router.get("", response_model=List[ProductResponse])
async def list_products(
    search: str = "",
    category: str = ALL,
    subcategory: str = ALL,
    savings: SavingsTier = SavingsTier.ALL,
    db: Session = Depends(get_db),
):
    """List the catalog, newest first, with optional listing filters."""
    products = product_service.list_products(db)
    return filter_products(products, search, category, subcategory, savings)


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: int, db: Session = Depends(get_db)):
    return product_service.get_product(db, product_id)


@router.get("/{product_id}/compare", response_model=ComparisonResponse)
async def compare_product(product_id: int, db: Session = Depends(get_db)):
    """Compare a product against the cheapest other product in its category."""
    target = product_service.get_product(db, product_id)
    candidate = select_comparison(target, product_service.list_products(db))
    return compare_products(target, candidate)


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    form: ProductForm = Depends(product_form),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    storage: LocalImageStorage = Depends(get_image_storage),
    admin=Depends(require_admin),
):
    """Create a new product. An image is required."""
    upload = await read_image(image)
    if upload is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Product image is required",
        )
    return product_service.create_product(db, storage, form, upload)


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: int,
    form: ProductForm = Depends(product_form),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    storage: LocalImageStorage = Depends(get_image_storage),
    admin=Depends(require_admin),
):
    """Update an existing product, optionally replacing its image."""
    upload = await read_image(image)
    return product_service.update_product(db, storage, product_id, form, upload)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    product_id: int,
    db: Session = Depends(get_db),
    storage: LocalImageStorage = Depends(get_image_storage),
    admin=Depends(require_admin),
):
    product_service.delete_product(db, storage, product_id)
