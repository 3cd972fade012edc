from __future__ import annotations

from enum import Enum
from typing import Union


class Gap(Enum):
    """Ellipsis marker standing in for an elided run of page numbers."""

    ELLIPSIS = "..."

    def __repr__(self) -> str:
        return "GAP"


GAP = Gap.ELLIPSIS

PageWindowEntry = Union[int, Gap]
PageWindow = list[PageWindowEntry]


def compute_page_window(
    current_page: int,
    total_pages: int,
    max_pages_to_show: int = 5,
) -> PageWindow:
    """Compute the ellipsis-collapsed list of page numbers to display.

    The window is centred on the current page and shifted inward at either
    edge. The first and last page are always present when there is more
    than one page; a run of skipped pages is replaced by ``GAP``.

    Args:
        current_page: 1-based current page (clamped into range)
        total_pages: Number of pages (values below 1 count as 1)
        max_pages_to_show: Width of the numbered window (values below 1 count as 1)

    Returns:
        Ordered list of page numbers and GAP markers

    Example:
        >>> compute_page_window(5, 10, 5)
        [1, GAP, 3, 4, 5, 6, 7, GAP, 10]
    """
    total_pages = max(1, total_pages)
    max_pages_to_show = max(1, max_pages_to_show)
    current_page = max(1, min(current_page, total_pages))

    if total_pages <= max_pages_to_show:
        return list(range(1, total_pages + 1))

    half = max_pages_to_show // 2
    start = current_page - half
    end = current_page + half

    if start < 1:
        start = 1
        end = min(max_pages_to_show, total_pages)
    elif end > total_pages:
        end = total_pages
        start = max(1, total_pages - max_pages_to_show + 1)

    window: PageWindow = []
    if start > 1:
        window.append(1)
        if start > 2:
            window.append(GAP)

    window.extend(range(start, end + 1))

    if end < total_pages:
        if end < total_pages - 1:
            window.append(GAP)
        window.append(total_pages)

    return window
