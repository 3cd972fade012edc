from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any

from pagewise.core.controller import PaginationController
from pagewise.sync.query_store import QueryStore
from pagewise.utils.exceptions import BindingConflict
from pagewise.utils.pagination import PageState
from pagewise.utils.types import (
    DEFAULT_ITEMS_PER_PAGE,
    DEFAULT_PAGE_PARAM,
    DEFAULT_PER_PAGE_PARAM,
    QueryPairs,
)

logger = logging.getLogger(__name__)


def parse_positive_int(raw: str | None, default: int) -> int:
    """Parse a query value, falling back to default when absent, malformed or < 1."""
    if raw is None:
        return default
    raw = raw.strip()
    if not raw.isdecimal():
        return default
    try:
        value = int(raw)
    except ValueError:
        # longer than the interpreter's int string limit
        return default
    return value if value >= 1 else default


@dataclass(frozen=True)
class URLBinding:
    """Names of the query parameters owning page and page size.

    ``default_per_page`` left as None is filled in from the bound
    controller's configured page size.
    """

    page_param: str = DEFAULT_PAGE_PARAM
    per_page_param: str = DEFAULT_PER_PAGE_PARAM
    default_per_page: int | None = None

    def __post_init__(self) -> None:
        if not self.page_param or not self.per_page_param:
            raise BindingConflict("Query parameter names cannot be empty")
        if self.page_param == self.per_page_param:
            raise BindingConflict(
                f"page_param and per_page_param are both '{self.page_param}'"
            )
        if self.default_per_page is not None and self.default_per_page < 1:
            raise BindingConflict("default_per_page must be >= 1")

    @property
    def owned(self) -> tuple[str, str]:
        return (self.page_param, self.per_page_param)

    @property
    def per_page_default(self) -> int:
        return self.default_per_page or DEFAULT_ITEMS_PER_PAGE

    def parse(self, store: QueryStore) -> tuple[int, int]:
        """Read (page, per_page) from a store, substituting defaults."""
        page = parse_positive_int(store.read(self.page_param), 1)
        per_page = parse_positive_int(store.read(self.per_page_param), self.per_page_default)
        return page, per_page

    def serialize(self, page: int, per_page: int) -> QueryPairs:
        """Owned pairs for a state; parameters at their default are omitted."""
        pairs: QueryPairs = []
        if page != 1:
            pairs.append((self.page_param, str(page)))
        if per_page != self.per_page_default:
            pairs.append((self.per_page_param, str(per_page)))
        return pairs

    def merge(self, existing: QueryPairs, page: int, per_page: int) -> QueryPairs:
        """Existing pairs minus the owned ones, followed by the serialized state."""
        kept = [(k, v) for k, v in existing if k not in self.owned]
        return kept + self.serialize(page, per_page)


def resolve_binding(
    controller_class: type[PaginationController],
    binding: URLBinding | None = None,
) -> URLBinding:
    """Complete a binding from a controller class's ``Settings``.

    Without a binding the parameter names come from the settings too; an
    explicit binding only has its missing default page size filled in.
    """
    settings = controller_class._settings
    if binding is None:
        return URLBinding(
            page_param=settings.page_param,
            per_page_param=settings.per_page_param,
            default_per_page=settings.items_per_page,
        )
    if binding.default_per_page is None:
        return dataclasses.replace(binding, default_per_page=settings.items_per_page)
    return binding


class URLSyncAdapter:
    """Keeps a PaginationController and a query string in step.

    Example:
        adapter = URLSyncAdapter(URLQueryStore("https://blog.test/posts?page=3"))
        pager = adapter.attach(total_items=120)
        pager.next_page()  # store now holds ?page=4

    Only one adapter should own a given pair of parameter names; concurrent
    owners overwrite each other.
    """

    def __init__(
        self,
        store: QueryStore,
        binding: URLBinding | None = None,
        preserve_params: bool = True,
    ) -> None:
        self.store = store
        self.binding = binding
        self.preserve_params = preserve_params
        self._controller: PaginationController | None = None
        self._unsubscribe = None
        self._syncing = False

    @property
    def controller(self) -> PaginationController | None:
        return self._controller

    def attach(
        self,
        total_items: int,
        controller_class: type[PaginationController] = PaginationController,
        **controller_kwargs: Any,
    ) -> PaginationController:
        """Build a controller initialised from the query string and bind it.

        Args:
            total_items: Size of the collection
            controller_class: PaginationController subclass to instantiate
            **controller_kwargs: Extra controller arguments (callbacks, window width)

        Returns:
            The bound controller
        """
        self.detach()
        self.binding = resolve_binding(controller_class, self.binding)
        page, per_page = self.binding.parse(self.store)
        controller = controller_class(
            total_items,
            items_per_page=per_page,
            initial_page=page,
            **controller_kwargs,
        )
        self._controller = controller
        self._unsubscribe = controller.subscribe(self._write)
        logger.debug(
            "Attached %s at page %d (%d per page)",
            type(controller).__name__,
            controller.current_page,
            controller.items_per_page,
        )
        return controller

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
        self._unsubscribe = None
        self._controller = None

    def sync_from_store(self) -> None:
        """Apply the store's current values to the controller.

        Used after the query string changed outside the adapter, e.g. a
        back/forward navigation.
        """
        if self._controller is None or self.binding is None:
            return
        page, per_page = self.binding.parse(self.store)
        self._syncing = True
        try:
            self._controller.set_items_per_page(per_page)
            self._controller.go_to_page(page)
        finally:
            self._syncing = False
        state = self._controller.state
        # clamping moved the page off the stored value
        if (state.current_page, state.items_per_page) != (page, per_page):
            self._write(state)

    def _write(self, state: PageState) -> None:
        if self._syncing:
            return
        existing = self.store.snapshot() if self.preserve_params else []
        pairs = self.binding.merge(existing, state.current_page, state.items_per_page)
        if pairs == self.store.snapshot():
            return
        self.store.replace(pairs)
