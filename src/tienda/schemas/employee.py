"""Pydantic schemas for employees."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class EmployeeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    salary: float = Field(..., ge=0)
    position: str = Field(..., min_length=1, max_length=100)


class EmployeeUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    salary: Optional[float] = Field(None, ge=0)
    position: Optional[str] = Field(None, min_length=1, max_length=100)


class EmployeeRead(BaseModel):
    id: int
    name: str
    salary: float
    position: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
