"""
SQLAlchemy Models for Optimized Demo API

Usage:
    from app.models import Base, Category, Product
"""

from .base import Base
from .category import Category
from .product import Product

__all__ = [
    "Base",
    "Category",
    "Product",
]
