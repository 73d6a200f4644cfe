from dataclasses import dataclass
from typing import Generic, TypeVar
from pydantic import BaseModel

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


class PaginationInput(BaseModel):
    page: int | None = None
    page_size: int | None = None

    def resolved(self) -> tuple[int, int]:
        """(page, page_size) with defaults applied and page_size clamped to MAX_PAGE_SIZE"""
        page = self.page if self.page and self.page > 0 else 1
        page_size = self.page_size if self.page_size and self.page_size > 0 else DEFAULT_PAGE_SIZE
        return page, min(page_size, MAX_PAGE_SIZE)


class PageInfo(BaseModel):
    """Pagination metadata"""
    current_page: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool
    page_size: int

    @classmethod
    def build(cls, *, page: int, page_size: int, total_count: int) -> "PageInfo":
        total_pages = (total_count + page_size - 1) // page_size
        return cls(
            current_page=page,
            total_pages=total_pages,
            has_next_page=page < total_pages,
            has_previous_page=page > 1,
            page_size=page_size,
        )


@dataclass
class Page(Generic[T]):
    """A page of ORM rows plus the size of the full filtered set"""
    data: list[T]
    total_count: int
    page_info: PageInfo
