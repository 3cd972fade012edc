from pagewise.core.window import GAP, Gap, PageWindow, compute_page_window
from pagewise.core.controller import PaginationController
from pagewise.core.infinite import (
    CancellationToken,
    DriverState,
    InfiniteScrollDriver,
    LoadOutcome,
    LoadResult,
    ScrollSurface,
    Viewport,
)

__all__ = [
    "GAP",
    "Gap",
    "PageWindow",
    "compute_page_window",
    "PaginationController",
    "CancellationToken",
    "DriverState",
    "InfiniteScrollDriver",
    "LoadOutcome",
    "LoadResult",
    "ScrollSurface",
    "Viewport",
]
