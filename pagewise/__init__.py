from pagewise.core import (
    GAP,
    Gap,
    compute_page_window,
    PaginationController,
    InfiniteScrollDriver,
    CancellationToken,
    DriverState,
    LoadOutcome,
    LoadResult,
    Viewport,
)
from pagewise.sync import (
    InMemoryQueryStore,
    URLQueryStore,
    URLBinding,
    URLSyncAdapter,
)
from pagewise.lifecycle import (
    on_page_change,
    on_items_per_page_change,
    on_total_change,
    before_load,
    after_load,
    enable_tracing,
    disable_tracing,
    PaginationEvent,
    add_listener,
)
from pagewise.utils import (
    PagewiseError,
    LoadCancelled,
    BindingConflict,
    Page,
    PageInfo,
    PageState,
    PaginationParams,
    PaginationSettings,
)

__all__ = [
    # Core
    "GAP",
    "Gap",
    "compute_page_window",
    "PaginationController",
    "InfiniteScrollDriver",
    "CancellationToken",
    "DriverState",
    "LoadOutcome",
    "LoadResult",
    "Viewport",
    # Sync
    "InMemoryQueryStore",
    "URLQueryStore",
    "URLBinding",
    "URLSyncAdapter",
    # Lifecycle
    "on_page_change",
    "on_items_per_page_change",
    "on_total_change",
    "before_load",
    "after_load",
    "enable_tracing",
    "disable_tracing",
    "PaginationEvent",
    "add_listener",
    # Utils
    "PagewiseError",
    "LoadCancelled",
    "BindingConflict",
    "Page",
    "PageInfo",
    "PageState",
    "PaginationParams",
    "PaginationSettings",
]
