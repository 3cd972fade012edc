from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """Offset-based pagination result."""

    items: list[T]
    page: int
    per_page: int
    total: int
    has_next: bool
    has_prev: bool
    total_pages: int


@dataclass(frozen=True)
class PageState:
    """Snapshot of a controller's state, handed to subscribers."""

    current_page: int
    items_per_page: int
    total_items: int
    total_pages: int


@dataclass(frozen=True)
class PageInfo:
    """1-based range of the items shown on the current page."""

    from_item: int
    to_item: int
    total: int

    def as_dict(self) -> dict[str, int]:
        return {"from": self.from_item, "to": self.to_item, "total": self.total}

    def describe(self) -> str:
        """Human readable range label, e.g. "Showing 11 to 20 of 45 entries"."""
        return f"Showing {self.from_item} to {self.to_item} of {self.total:,} entries"


@dataclass(frozen=True)
class PaginationParams:
    """Parameters a content source needs to fetch the current page."""

    page: int
    per_page: int
    offset: int

    def as_query(self) -> dict[str, Any]:
        """WordPress REST style query arguments."""
        return {"page": self.page, "per_page": self.per_page, "offset": self.offset}
