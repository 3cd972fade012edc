from pagewise.lifecycle.hooks import (
    on_page_change,
    on_items_per_page_change,
    on_total_change,
    before_load,
    after_load,
    collect_hooks,
    fire_hooks,
    run_hooks,
    Subscribers,
)
from pagewise.lifecycle.observability import (
    enable_tracing,
    disable_tracing,
    PaginationEvent,
    add_listener,
    remove_listener,
)

__all__ = [
    "on_page_change",
    "on_items_per_page_change",
    "on_total_change",
    "before_load",
    "after_load",
    "collect_hooks",
    "fire_hooks",
    "run_hooks",
    "Subscribers",
    "enable_tracing",
    "disable_tracing",
    "PaginationEvent",
    "add_listener",
    "remove_listener",
]
