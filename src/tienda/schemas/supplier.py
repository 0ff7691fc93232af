"""Pydantic schemas for suppliers."""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from tienda.schemas.category import CategorySummary


class SupplierCreate(BaseModel):
    name: str = Field(..., min_length=3, max_length=50)
    contact: int = Field(..., ge=0)
    address: str = Field(..., min_length=2, max_length=50)
    category_id: uuid.UUID


class SupplierUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=3, max_length=50)
    contact: Optional[int] = Field(None, ge=0)
    address: Optional[str] = Field(None, min_length=2, max_length=50)
    category_id: Optional[uuid.UUID] = None


class SupplierRead(BaseModel):
    id: uuid.UUID
    name: str
    contact: int
    address: str
    date_of_hire: datetime
    category: CategorySummary

    model_config = {"from_attributes": True}
