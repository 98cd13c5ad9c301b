from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator


class StockLevel(BaseModel):
    quantity: int = Field(ge=0)
    low_stock_threshold: int = Field(default=10, ge=0)


def _coerce_stock(value):
    # A bare number is shorthand for {"quantity": n}
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return {"quantity": int(value)}
    return value


class ProductCreate(BaseModel):
    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    price: float = Field(ge=0)
    category: str = Field(default="General", min_length=1)
    stock: StockLevel
    image: Optional[str] = None
    primary_image: Optional[str] = None
    image_url: Optional[str] = None
    is_active: bool = True
    is_featured: bool = False
    weight: Optional[str] = None
    tags: List[str] = []

    @model_validator(mode="before")
    @classmethod
    def normalize_stock(cls, data):
        if isinstance(data, dict) and "stock" in data:
            data = {**data, "stock": _coerce_stock(data["stock"])}
        return data

    @model_validator(mode="after")
    def require_image(self):
        if not (self.image or self.primary_image or self.image_url):
            raise ValueError("At least one image URL is required (image, primary_image, or image_url)")
        if not self.image_url:
            self.image_url = self.image or self.primary_image
        return self


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    price: Optional[float] = Field(default=None, ge=0)
    category: Optional[str] = Field(default=None, min_length=1)
    stock: Optional[StockLevel] = None
    image: Optional[str] = None
    primary_image: Optional[str] = None
    image_url: Optional[str] = None
    is_active: Optional[bool] = None
    is_featured: Optional[bool] = None
    weight: Optional[str] = None
    tags: Optional[List[str]] = None

    @model_validator(mode="before")
    @classmethod
    def normalize_stock(cls, data):
        if isinstance(data, dict) and data.get("stock") is not None:
            data = {**data, "stock": _coerce_stock(data["stock"])}
        return data


class ProductResponse(BaseModel):
    id: int
    dealer_id: int
    name: str
    description: str
    price: float
    category: str
    image: Optional[str] = None
    primary_image: Optional[str] = None
    image_url: Optional[str] = None
    stock: StockLevel
    is_low_stock: bool
    is_active: bool
    is_featured: bool
    weight: Optional[str] = None
    tags: List[str] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @model_validator(mode="before")
    @classmethod
    def from_model(cls, data):
        if isinstance(data, dict):
            return data
        return {
            "id": data.id,
            "dealer_id": data.dealer_id,
            "name": data.name,
            "description": data.description,
            "price": data.price,
            "category": data.category,
            "image": data.image,
            "primary_image": data.primary_image,
            "image_url": data.image_url,
            "stock": {"quantity": data.stock_quantity, "low_stock_threshold": data.low_stock_threshold},
            "is_low_stock": data.stock_quantity <= data.low_stock_threshold,
            "is_active": data.is_active,
            "is_featured": data.is_featured,
            "weight": data.weight,
            "tags": data.tags or [],
            "created_at": data.created_at,
            "updated_at": data.updated_at,
        }


class ProductList(BaseModel):
    products: List[ProductResponse]


class ProductDeleted(BaseModel):
    id: int
