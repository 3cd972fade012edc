from pagewise.utils.exceptions import (
    PagewiseError,
    LoadCancelled,
    BindingConflict,
)
from pagewise.utils.pagination import Page, PageInfo, PageState, PaginationParams
from pagewise.utils.settings import PaginationSettings, SettingsResolver
from pagewise.utils.types import (
    QueryPairs,
    coerce_int,
    clamp,
    DEFAULT_ITEMS_PER_PAGE,
    DEFAULT_MAX_PAGES_TO_SHOW,
)

__all__ = [
    "PagewiseError",
    "LoadCancelled",
    "BindingConflict",
    "Page",
    "PageInfo",
    "PageState",
    "PaginationParams",
    "PaginationSettings",
    "SettingsResolver",
    "QueryPairs",
    "coerce_int",
    "clamp",
    "DEFAULT_ITEMS_PER_PAGE",
    "DEFAULT_MAX_PAGES_TO_SHOW",
]
