from __future__ import annotations

import logging
import math
from typing import Any, Callable, ClassVar, Sequence, TypeVar

from pagewise.core.window import PageWindow, compute_page_window
from pagewise.lifecycle.hooks import (
    ITEMS_PER_PAGE_CHANGE,
    PAGE_CHANGE,
    TOTAL_CHANGE,
    Subscribers,
    collect_hooks,
    fire_hooks,
)
from pagewise.lifecycle.observability import PaginationEvent, emit_event
from pagewise.utils.pagination import Page, PageInfo, PageState, PaginationParams
from pagewise.utils.settings import PaginationSettings, SettingsResolver
from pagewise.utils.types import Unsubscribe, clamp, coerce_int

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PaginationController:
    """Owns the current page of a paginated collection.

    The controller holds only ``current_page``, ``items_per_page`` and
    ``total_items``; everything else is derived on access. Input is never
    rejected: out-of-range or malformed values are clamped, and changes that
    would leave the current page past the end pull it back to the last page.

    Subclasses can declare an inner ``Settings`` class (``items_per_page``,
    ``max_pages_to_show``) and react to changes with the ``@on_page_change``,
    ``@on_items_per_page_change`` and ``@on_total_change`` decorators.

    Example:
        pager = PaginationController(total_items=95, items_per_page=10)
        pager.go_to_page(4)
        rows = pager.get_page_items(all_rows)
    """

    _settings: ClassVar[PaginationSettings] = PaginationSettings()
    _hooks: ClassVar[dict[str, list[str]]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._settings = SettingsResolver.resolve(cls)
        cls._hooks = collect_hooks(cls)

    def __init__(
        self,
        total_items: int,
        items_per_page: int | None = None,
        initial_page: int = 1,
        max_pages_to_show: int | None = None,
        on_page_change: Callable[[int], Any] | None = None,
        on_items_per_page_change: Callable[[int], Any] | None = None,
    ) -> None:
        settings = self._settings
        self._total_items = max(0, coerce_int(total_items, 0))
        self._items_per_page = max(1, coerce_int(items_per_page, settings.items_per_page))
        self._max_pages_to_show = max(
            1, coerce_int(max_pages_to_show, settings.max_pages_to_show)
        )
        self._current_page = clamp(coerce_int(initial_page, 1), 1, self.total_pages)
        self._on_page_change = on_page_change
        self._on_items_per_page_change = on_items_per_page_change
        self._subscribers = Subscribers()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(page={self._current_page}/{self.total_pages}, "
            f"items_per_page={self._items_per_page}, total_items={self._total_items})"
        )

    # --- State ---

    @property
    def current_page(self) -> int:
        return self._current_page

    @property
    def items_per_page(self) -> int:
        return self._items_per_page

    @property
    def total_items(self) -> int:
        return self._total_items

    @property
    def max_pages_to_show(self) -> int:
        return self._max_pages_to_show

    @property
    def default_items_per_page(self) -> int:
        """Configured page size, before any runtime change."""
        return self._settings.items_per_page

    @property
    def total_pages(self) -> int:
        return max(1, math.ceil(self._total_items / self._items_per_page))

    @property
    def start_index(self) -> int:
        return (self._current_page - 1) * self._items_per_page

    @property
    def end_index(self) -> int:
        return min(self.start_index + self._items_per_page, self._total_items)

    @property
    def has_previous_page(self) -> bool:
        return self._current_page > 1

    @property
    def has_next_page(self) -> bool:
        return self._current_page < self.total_pages

    @property
    def is_first_page(self) -> bool:
        return self._current_page == 1

    @property
    def is_last_page(self) -> bool:
        return self._current_page == self.total_pages

    @property
    def is_pagination_needed(self) -> bool:
        """Whether there is more than one page worth of items."""
        return self._total_items > self._items_per_page

    @property
    def page_window(self) -> PageWindow:
        return compute_page_window(self._current_page, self.total_pages, self._max_pages_to_show)

    @property
    def state(self) -> PageState:
        return PageState(
            current_page=self._current_page,
            items_per_page=self._items_per_page,
            total_items=self._total_items,
            total_pages=self.total_pages,
        )

    # --- Subscriptions ---

    def subscribe(self, callback: Callable[[PageState], Any]) -> Unsubscribe:
        """Call ``callback(state)`` after every state change.

        Returns:
            A function that removes the subscription
        """
        return self._subscribers.subscribe(callback)

    # --- Navigation ---

    def go_to_page(self, page: Any) -> bool:
        """Move to ``page``, clamped into ``[1, total_pages]``.

        Input that cannot be read as an integer leaves the page unchanged.

        Returns:
            True if the current page changed
        """
        target = clamp(coerce_int(page, self._current_page), 1, self.total_pages)
        if target == self._current_page:
            return False
        old_page = self._current_page
        self._current_page = target
        self._notify(old_page=old_page)
        return True

    def next_page(self) -> bool:
        if not self.has_next_page:
            return False
        return self.go_to_page(self._current_page + 1)

    def previous_page(self) -> bool:
        if not self.has_previous_page:
            return False
        return self.go_to_page(self._current_page - 1)

    def first_page(self) -> bool:
        return self.go_to_page(1)

    def last_page(self) -> bool:
        return self.go_to_page(self.total_pages)

    def set_items_per_page(self, items_per_page: Any) -> bool:
        """Change the page size, keeping the first visible item on screen.

        The new page is the one containing the item that was at the top of
        the old page, so the reader does not lose their position.

        Returns:
            True if the page size changed
        """
        new_size = max(1, coerce_int(items_per_page, self._items_per_page))
        if new_size == self._items_per_page:
            return False

        old_size = self._items_per_page
        old_page = self._current_page
        old_start = self.start_index

        self._items_per_page = new_size
        self._current_page = clamp(old_start // new_size + 1, 1, self.total_pages)
        self._notify(
            old_page=old_page if self._current_page != old_page else None,
            old_items_per_page=old_size,
        )
        return True

    def set_total_items(self, total_items: Any) -> bool:
        """Inform the controller that the size of the collection changed.

        Returns:
            True if the total changed
        """
        new_total = max(0, coerce_int(total_items, self._total_items))
        if new_total == self._total_items:
            return False

        old_total = self._total_items
        old_page = self._current_page
        self._total_items = new_total
        self._current_page = clamp(self._current_page, 1, self.total_pages)
        self._notify(
            old_page=old_page if self._current_page != old_page else None,
            old_total=old_total,
        )
        return True

    # --- Slicing ---

    def get_page_items(self, items: Sequence[T]) -> Sequence[T]:
        """Slice the current page out of the full collection."""
        return items[self.start_index:self.end_index]

    def paginate(self, items: Sequence[T]) -> Page[T]:
        """Slice the current page and bundle it with its metadata."""
        return Page(
            items=list(self.get_page_items(items)),
            page=self._current_page,
            per_page=self._items_per_page,
            total=self._total_items,
            has_next=self.has_next_page,
            has_prev=self.has_previous_page,
            total_pages=self.total_pages,
        )

    def get_page_info(self) -> PageInfo:
        return PageInfo(
            from_item=self.start_index + 1 if self._total_items > 0 else 0,
            to_item=self.end_index,
            total=self._total_items,
        )

    def get_pagination_params(self) -> PaginationParams:
        """Parameters for fetching the current page from a content source."""
        return PaginationParams(
            page=self._current_page,
            per_page=self._items_per_page,
            offset=self.start_index,
        )

    # --- Internal ---

    def _notify(
        self,
        old_page: int | None = None,
        old_items_per_page: int | None = None,
        old_total: int | None = None,
    ) -> None:
        """Run callbacks, hooks and subscribers for a completed state change."""
        source = type(self).__name__

        if old_total is not None:
            logger.debug("Total items changed from %d to %d", old_total, self._total_items)
            fire_hooks(self, TOTAL_CHANGE, self._total_items)

        if old_items_per_page is not None:
            if self._on_items_per_page_change is not None:
                self._on_items_per_page_change(self._items_per_page)
            fire_hooks(self, ITEMS_PER_PAGE_CHANGE, self._items_per_page)
            emit_event(
                PaginationEvent(
                    action="per_page_change",
                    source=source,
                    data={
                        "from": old_items_per_page,
                        "to": self._items_per_page,
                        "total_pages": self.total_pages,
                    },
                )
            )

        if old_page is not None:
            if self._on_page_change is not None:
                self._on_page_change(self._current_page)
            fire_hooks(self, PAGE_CHANGE, self._current_page)
            emit_event(
                PaginationEvent(
                    action="page_change",
                    source=source,
                    data={"from": old_page, "to": self._current_page},
                )
            )

        self._subscribers.notify(self.state)
