"""
Pydantic Schemas for Optimized Demo API
Based on app/models
"""

from .base import BaseSchema, JsonDecimal
from .category import CategoryBase, CategoryResponse
from .product import (
    ProductBase,
    ProductCreate,
    ProductResponse,
    ProductDto,
    BulkPriceUpdateResponse,
)

__all__ = [
    "BaseSchema",
    "JsonDecimal",
    "CategoryBase",
    "CategoryResponse",
    "ProductBase",
    "ProductCreate",
    "ProductResponse",
    "ProductDto",
    "BulkPriceUpdateResponse",
]
