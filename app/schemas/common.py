import math
from typing import Generic, List, TypeVar
from pydantic import BaseModel

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    """One page of a paginated listing (zero-based page index)."""
    content: List[T]
    page: int
    size: int
    total_elements: int
    total_pages: int

    @classmethod
    def build(cls, content: List[T], page: int, size: int, total_elements: int) -> "Page[T]":
        return cls(
            content=content,
            page=page,
            size=size,
            total_elements=total_elements,
            total_pages=math.ceil(total_elements / size) if size else 0,
        )
