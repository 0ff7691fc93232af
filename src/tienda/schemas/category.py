"""Pydantic schemas for product categories."""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=3, max_length=50)


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=3, max_length=50)
    is_deleted: Optional[bool] = None


class CategoryRead(BaseModel):
    id: uuid.UUID
    name: str
    is_deleted: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CategorySummary(BaseModel):
    """Category as nested inside products and suppliers."""
    id: uuid.UUID
    name: str

    model_config = {"from_attributes": True}
