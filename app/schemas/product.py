"""Product schemas"""
from decimal import Decimal
from typing import Optional

from pydantic import Field

from .base import BaseSchema, JsonDecimal


class ProductBase(BaseSchema):
    """Base product schema"""
    name: str = Field(..., max_length=255)
    category_id: int


class ProductCreate(ProductBase):
    """Schema for creating a product (id is assigned by the store)"""
    price: Decimal


class ProductResponse(ProductBase):
    """Schema for product response"""
    id: int
    price: JsonDecimal


class ProductDto(BaseSchema):
    """Product joined with its category name"""
    product_id: int
    product_name: str
    category_name: Optional[str] = None


class BulkPriceUpdateResponse(BaseSchema):
    """Schema for bulk price update acknowledgement"""
    status: str = "ok"
    updated: int
