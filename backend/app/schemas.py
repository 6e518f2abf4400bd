import math
from typing import Dict, List, Optional, Union
from datetime import datetime
from pydantic import BaseModel, Field, EmailStr, field_validator, model_validator


# --- Category ---
class CategoryBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    icon: str = Field("", max_length=16)


class CategoryCreate(CategoryBase):
    pass


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    icon: Optional[str] = Field(None, max_length=16)
    subcategories: Optional[List[str]] = None


class SubcategoryRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)


class CategoryResponse(CategoryBase):
    id: int
    subcategories: List[str] = []

    class Config:
        from_attributes = True


# --- Product ---
class ProductForm(BaseModel):
    """
    Administrator product form. Every recognised field is listed with its
    default; the image travels separately as an upload.
    """

    name: str = ""
    category: str = ""
    subcategory: str = ""
    original_price: float = 0.0
    discount_price: float = 0.0
    cost_per_use: float = 0.0
    usage_unit: str = "ml"
    usage_amount: str = ""
    affiliate_url: str = ""

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Product name is required")
        return v.strip()

    @field_validator("category")
    @classmethod
    def category_required(cls, v: str) -> str:
        if not v:
            raise ValueError("Category is required")
        return v

    @field_validator("original_price")
    @classmethod
    def original_price_positive(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("Original price must be a number")
        if v <= 0:
            raise ValueError("Original price must be greater than 0")
        return v

    @field_validator("discount_price")
    @classmethod
    def discount_price_positive(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("Discount price must be a number")
        if v <= 0:
            raise ValueError("Discount price must be greater than 0")
        return v

    @field_validator("cost_per_use")
    @classmethod
    def cost_per_use_non_negative(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("Cost per use must be a number")
        if v < 0:
            raise ValueError("Cost per use cannot be negative")
        return v

    @field_validator("affiliate_url")
    @classmethod
    def affiliate_url_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Affiliate URL is required")
        return v.strip()


class ProductResponse(BaseModel):
    id: int
    name: str
    category: str
    subcategory: str = ""
    original_price: float
    discount_price: float
    cost_per_use: Optional[float] = None
    usage_unit: str = ""
    usage_amount: str = ""
    affiliate_url: str
    image_url: str = ""
    created_at: datetime

    class Config:
        from_attributes = True


class ComparisonResponse(BaseModel):
    target: ProductResponse
    candidate: Optional[ProductResponse] = None
    winner: Optional[str] = Field(None, pattern="^(target|candidate)$")
    price_diff: float = 0.0
    target_savings_percent: int
    candidate_savings_percent: Optional[int] = None


# --- Favorites ---
class FavoriteState(BaseModel):
    product_id: int
    is_favorite: bool


# --- Purchases ---
class PurchaseCreate(BaseModel):
    product_id: int


class PurchaseResponse(BaseModel):
    id: int
    product_id: int
    product_name: str
    product_image: Optional[str] = None
    category: str
    subcategory: Optional[str] = None
    original_price: float
    discount_price: float
    savings: float
    cost_per_use: Optional[float] = None
    usage_unit: Optional[str] = None
    purchased_at: datetime

    class Config:
        from_attributes = True


class GroupStats(BaseModel):
    count: int
    savings: float
    spent: float


class SavingsStatsResponse(BaseModel):
    total_savings: float
    total_spent: float
    total_original: float
    # whole percent; NaN when the history holds non-numeric amounts
    avg_savings_percent: Union[int, float]
    total_purchases: int
    by_category: Dict[str, GroupStats]
    by_month: Dict[str, GroupStats]


# --- Auth ---
class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    confirm_password: str
    display_name: Optional[str] = Field(None, max_length=100)

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class UserResponse(BaseModel):
    id: int
    email: str
    display_name: Optional[str] = None
    provider: str = "password"
    is_active: bool = True

    class Config:
        from_attributes = True


class Token(BaseModel):
    access_token: str
    token_type: str


class FederatedSignIn(BaseModel):
    provider: str = Field(..., min_length=1, max_length=32)
    id_token: str = Field(..., min_length=1)


class SessionResponse(BaseModel):
    user: Optional[UserResponse] = None
    is_admin: bool = False


# --- Admin ---
class AdminStats(BaseModel):
    total_products: int
    total_categories: int
    total_subcategories: int
    recent_products: int
