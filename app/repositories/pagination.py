"""
Pagination primitives shared by listing queries.

`PaginationParams` is what callers ask for; `PagedResult` is what listing
queries hand back (one page of items plus the totals needed to render pagers).
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, Generic, List, Optional, TypeVar

T = TypeVar("T")
U = TypeVar("U")

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 50


@dataclass(frozen=True)
class PaginationParams:
    page_number: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    order_by: Optional[str] = None
    max_page_size: int = field(default=MAX_PAGE_SIZE, repr=False)

    def __post_init__(self) -> None:
        # Clamp rather than reject: out-of-range paging is not worth a 400
        object.__setattr__(self, "page_number", max(1, int(self.page_number)))
        size = max(1, int(self.page_size))
        object.__setattr__(self, "page_size", min(size, self.max_page_size))

    @property
    def offset(self) -> int:
        return (self.page_number - 1) * self.page_size


@dataclass(frozen=True)
class PagedResult(Generic[T]):
    items: List[T]
    total_count: int
    current_page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        if self.total_count == 0:
            return 0
        return math.ceil(self.total_count / self.page_size)

    def map(self, func: Callable[[T], U]) -> "PagedResult[U]":
        """Return the same page with every item transformed by `func`."""
        return PagedResult(
            items=[func(item) for item in self.items],
            total_count=self.total_count,
            current_page=self.current_page,
            page_size=self.page_size,
        )


__all__ = ["PaginationParams", "PagedResult", "DEFAULT_PAGE_SIZE", "MAX_PAGE_SIZE"]
