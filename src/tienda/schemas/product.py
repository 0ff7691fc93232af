"""Pydantic schemas for products.

Create requires every catalog field; Update takes any subset and only
the fields actually sent are applied.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from tienda.schemas.category import CategorySummary


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    weight: float = Field(default=0.0, ge=0)
    price: float = Field(..., ge=0)
    img: Optional[str] = Field(None, max_length=255)
    stock: int = Field(default=0, ge=0)
    description: Optional[str] = None
    category_id: uuid.UUID


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    weight: Optional[float] = Field(None, ge=0)
    price: Optional[float] = Field(None, ge=0)
    img: Optional[str] = Field(None, max_length=255)
    stock: Optional[int] = Field(None, ge=0)
    description: Optional[str] = None
    category_id: Optional[uuid.UUID] = None


class ProductRead(BaseModel):
    id: uuid.UUID
    name: str
    weight: float
    price: float
    img: Optional[str] = None
    stock: int
    description: Optional[str] = None
    category: CategorySummary
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
