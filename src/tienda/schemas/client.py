"""Pydantic schemas for store clients."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
PHONE_PATTERN = r"^\+?[0-9 ]{6,20}$"


class ClientCreate(BaseModel):
    username: str = Field(..., min_length=3, max_length=50, pattern=r"^[A-Za-z0-9_.-]+$")
    full_name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    address: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, pattern=PHONE_PATTERN)
    image: Optional[str] = Field(None, max_length=255)


class ClientUpdate(BaseModel):
    username: Optional[str] = Field(
        None, min_length=3, max_length=50, pattern=r"^[A-Za-z0-9_.-]+$"
    )
    full_name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[str] = Field(None, max_length=255, pattern=EMAIL_PATTERN)
    address: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, pattern=PHONE_PATTERN)
    image: Optional[str] = Field(None, max_length=255)
    is_deleted: Optional[bool] = None


class ClientRead(BaseModel):
    id: int
    username: str
    full_name: str
    email: str
    address: Optional[str] = None
    phone: Optional[str] = None
    image: Optional[str] = None
    is_deleted: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
