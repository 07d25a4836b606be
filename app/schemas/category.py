"""Category schemas"""
from pydantic import Field

from .base import BaseSchema


class CategoryBase(BaseSchema):
    """Base category schema"""
    name: str = Field(..., max_length=255)


class CategoryResponse(CategoryBase):
    """Schema for category response"""
    id: int
