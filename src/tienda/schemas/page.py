"""Page envelope returned by every list endpoint."""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class PageResponse(BaseModel, Generic[T]):
    content: list[T]
    total_pages: int
    total_elements: int
    page_size: int
    page_number: int
    total_page_elements: int
    sort_by: str
    direction: str
