from __future__ import annotations

from typing import Any, Callable, Generic, Optional, TypeVar
from urllib.parse import urlencode

from pydantic import BaseModel
from starlette.datastructures import URL, QueryParams
from starlette.requests import Request

from pagewise.core.controller import PaginationController
from pagewise.core.window import Gap, PageWindow
from pagewise.sync.url_binding import URLBinding, URLSyncAdapter, resolve_binding
from pagewise.utils.pagination import Page, PaginationParams
from pagewise.utils.types import QueryPairs

T = TypeVar("T")


class RequestQueryStore:
    """Query store over a Starlette URL, used to build links from a request."""

    def __init__(self, url: URL | str) -> None:
        self._url = URL(str(url))

    @property
    def url(self) -> URL:
        return self._url

    def read(self, key: str) -> str | None:
        return QueryParams(self._url.query).get(key)

    def snapshot(self) -> QueryPairs:
        return list(QueryParams(self._url.query).multi_items())

    def replace(self, pairs: Any) -> None:
        self._url = self._url.replace(query=urlencode(list(pairs)))


def pagination_params(
    binding: URLBinding | None = None,
    max_per_page: int | None = None,
    controller_class: type[PaginationController] = PaginationController,
) -> Callable[[Request], PaginationParams]:
    """Create a FastAPI dependency that reads page parameters leniently.

    Malformed values fall back to defaults instead of producing a 422. The
    page size is capped at ``max_per_page``, which defaults to the
    controller class's ``Settings.max_items_per_page``; parameter names and
    the default page size come from the same settings.

    Usage:
        @app.get("/posts")
        async def posts(params: PaginationParams = Depends(pagination_params())): ...
    """
    binding = resolve_binding(controller_class, binding)
    if max_per_page is None:
        max_per_page = controller_class._settings.max_items_per_page

    def dependency(request: Request) -> PaginationParams:
        page, per_page = binding.parse(RequestQueryStore(request.url))
        per_page = min(per_page, max_per_page)
        return PaginationParams(page=page, per_page=per_page, offset=(page - 1) * per_page)

    return dependency


def controller_from_request(
    request: Request,
    total_items: int,
    binding: URLBinding | None = None,
    **controller_kwargs: Any,
) -> PaginationController:
    """Build a controller positioned from the request's query string."""
    adapter = URLSyncAdapter(RequestQueryStore(request.url), binding=binding)
    return adapter.attach(total_items, **controller_kwargs)


def serialize_window(window: PageWindow) -> list[int | str]:
    """JSON friendly page window: gaps become "..."."""
    return [entry.value if isinstance(entry, Gap) else entry for entry in window]


class PaginatedResponse(BaseModel, Generic[T]):
    """Paginated response model for API endpoints."""

    items: list[T]
    page: int
    per_page: int
    total: int
    has_next: bool
    has_prev: bool
    total_pages: int
    window: list[int | str] = []

    @classmethod
    def from_page(cls, page_obj: Page, window: PageWindow | None = None) -> PaginatedResponse:
        return cls(
            items=page_obj.items,
            page=page_obj.page,
            per_page=page_obj.per_page,
            total=page_obj.total,
            has_next=page_obj.has_next,
            has_prev=page_obj.has_prev,
            total_pages=page_obj.total_pages,
            window=serialize_window(window or []),
        )

    @classmethod
    def from_controller(cls, controller: PaginationController, items: list[Any]) -> PaginatedResponse:
        """Slice ``items`` with the controller and describe the result."""
        return cls.from_page(controller.paginate(items), controller.page_window)


class PageLink(BaseModel):
    """One entry of a rendered page window."""

    label: str
    page: Optional[int] = None
    href: Optional[str] = None
    current: bool = False


class PageLinks(BaseModel):
    """Navigation hrefs for the rendering layer; None where the control is disabled."""

    first: Optional[str] = None
    previous: Optional[str] = None
    next: Optional[str] = None
    last: Optional[str] = None
    pages: list[PageLink] = []


def page_links(
    controller: PaginationController,
    url: URL | str,
    binding: URLBinding | None = None,
) -> PageLinks:
    """Build hrefs for every navigation control of ``controller``.

    Unrelated query parameters on ``url`` are preserved.
    """
    binding = resolve_binding(type(controller), binding)
    per_page = controller.items_per_page

    def href(page: int) -> str:
        store = RequestQueryStore(url)
        store.replace(binding.merge(store.snapshot(), page, per_page))
        return str(store.url)

    current = controller.current_page
    pages: list[PageLink] = []
    for entry in controller.page_window:
        if isinstance(entry, Gap):
            pages.append(PageLink(label=entry.value))
        else:
            pages.append(
                PageLink(label=str(entry), page=entry, href=href(entry), current=entry == current)
            )

    return PageLinks(
        first=href(1) if controller.has_previous_page else None,
        previous=href(current - 1) if controller.has_previous_page else None,
        next=href(current + 1) if controller.has_next_page else None,
        last=href(controller.total_pages) if controller.has_next_page else None,
        pages=pages,
    )
