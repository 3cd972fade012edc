from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, ClassVar, Generic, Protocol, Sequence, TypeVar

from pagewise.lifecycle.hooks import AFTER_LOAD, BEFORE_LOAD, collect_hooks, run_hooks
from pagewise.lifecycle.observability import track_load
from pagewise.utils.exceptions import LoadCancelled
from pagewise.utils.settings import PaginationSettings, SettingsResolver
from pagewise.utils.types import coerce_int

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DriverState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"


class LoadOutcome(str, Enum):
    LOADED = "loaded"
    FAILED = "failed"
    CANCELLED = "cancelled"
    SKIPPED = "skipped"  # guard did not pass, nothing happened
    STALE = "stale"  # settled after a reset or close, result ignored


@dataclass(frozen=True)
class LoadResult:
    """Explicit outcome of a single load_more() call."""

    outcome: LoadOutcome
    revealed_chunks: int
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is LoadOutcome.LOADED

    @property
    def reason(self) -> str | None:
        if self.error is None:
            return None
        return str(self.error) or type(self.error).__name__


class CancellationToken:
    """Cooperative cancellation flag handed to loaders."""

    def __init__(self) -> None:
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True

    def raise_if_cancelled(self) -> None:
        """Raise LoadCancelled if the load this token belongs to was abandoned."""
        if self._cancelled:
            raise LoadCancelled("Load was cancelled")


Loader = Callable[[CancellationToken], Awaitable[Any]]


class ScrollSurface(Protocol):
    """Anything that reports scroll/resize events and its distance to the bottom."""

    def add_listener(self, callback: Callable[[], Any]) -> None: ...

    def remove_listener(self, callback: Callable[[], Any]) -> None: ...

    def distance_to_bottom(self) -> float: ...


class Viewport:
    """In-memory scroll surface.

    Rendering layers feed it scroll and resize measurements; listeners are
    called on every ``scroll_to`` and ``resize``.
    """

    def __init__(self, height: float, content_height: float, scroll_top: float = 0.0) -> None:
        self.height = height
        self.content_height = content_height
        self.scroll_top = scroll_top
        self._listeners: list[Callable[[], Any]] = []

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def add_listener(self, callback: Callable[[], Any]) -> None:
        self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[], Any]) -> None:
        self._listeners.remove(callback)

    def distance_to_bottom(self) -> float:
        return max(0.0, self.content_height - (self.scroll_top + self.height))

    def scroll_to(self, scroll_top: float) -> None:
        max_top = max(0.0, self.content_height - self.height)
        self.scroll_top = max(0.0, min(scroll_top, max_top))
        self._dispatch()

    def resize(self, height: float) -> None:
        self.height = height
        self._dispatch()

    def _dispatch(self) -> None:
        for callback in list(self._listeners):
            callback()


class InfiniteScrollDriver(Generic[T]):
    """Progressively reveals a sequence one chunk at a time.

    The driver is either idle or loading. ``load_more()`` only runs while
    idle and while more items exist; it awaits the injected ``fetch_more``
    loader (which may append to the backing sequence), then reveals one more
    chunk. A failed load returns to idle without revealing anything and is
    reported through the returned ``LoadResult`` and ``error``.

    ``reset()`` and ``close()`` advance a generation counter and cancel the
    in-flight token, so a load that settles afterwards is ignored.
    """

    _settings: ClassVar[PaginationSettings] = PaginationSettings()
    _hooks: ClassVar[dict[str, list[str]]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._settings = SettingsResolver.resolve(cls)
        cls._hooks = collect_hooks(cls)

    def __init__(
        self,
        items: Sequence[T],
        items_per_page: int | None = None,
        fetch_more: Loader | None = None,
        has_more: bool | None = None,
        threshold: float | None = None,
        timeout: float | None = None,
    ) -> None:
        settings = self._settings
        self._items = items
        self._items_per_page = max(1, coerce_int(items_per_page, settings.items_per_page))
        self._fetch_more = fetch_more
        self._has_more = has_more
        self._threshold = settings.scroll_threshold if threshold is None else threshold
        self._timeout = settings.load_timeout if timeout is None else timeout

        self._revealed_chunks = 1
        self._state = DriverState.IDLE
        self._generation = 0
        self._token: CancellationToken | None = None
        self._last_result: LoadResult | None = None
        self._error: str | None = None

        self._surface: ScrollSurface | None = None
        self._listener = self._handle_scroll
        self._listening = False
        self._pending: asyncio.Task | None = None
        self._closed = False

    # --- State ---

    @property
    def items(self) -> Sequence[T]:
        return self._items

    @property
    def items_per_page(self) -> int:
        return self._items_per_page

    @property
    def revealed_chunks(self) -> int:
        return self._revealed_chunks

    @property
    def visible_items(self) -> list[T]:
        return list(self._items[: self._revealed_chunks * self._items_per_page])

    @property
    def has_more(self) -> bool:
        """Whether another chunk can be loaded.

        Uses the caller supplied flag when one was given, otherwise whether
        the backing sequence holds more items than are visible.
        """
        if self._has_more is not None:
            return self._has_more
        return self._revealed_chunks * self._items_per_page < len(self._items)

    @has_more.setter
    def has_more(self, value: bool | None) -> None:
        self._has_more = value
        self._sync_listener()

    @property
    def state(self) -> DriverState:
        return self._state

    @property
    def is_loading(self) -> bool:
        return self._state is DriverState.LOADING

    @property
    def last_result(self) -> LoadResult | None:
        return self._last_result

    @property
    def error(self) -> str | None:
        """Message of the last failed load, cleared when a new load starts."""
        return self._error

    @property
    def is_listening(self) -> bool:
        return self._listening

    # --- Loading ---

    async def load_more(self) -> LoadResult:
        """Load and reveal the next chunk.

        Returns:
            LoadResult describing what happened. SKIPPED when a load is
            already in flight or nothing more is available.
        """
        if self._closed or self._state is DriverState.LOADING or not self.has_more:
            return LoadResult(LoadOutcome.SKIPPED, self._revealed_chunks)

        generation = self._generation
        token = CancellationToken()
        self._token = token
        self._state = DriverState.LOADING
        self._error = None
        self._sync_listener()

        error: BaseException | None = None
        try:
            async with track_load(type(self).__name__, chunk=self._revealed_chunks + 1) as ctx:
                try:
                    await run_hooks(self, BEFORE_LOAD)
                    if self._fetch_more is not None:
                        await self._call_loader(token)
                except Exception as exc:
                    error = exc
                result = self._settle(generation, token, error)
                ctx["outcome"] = result.outcome.value
        finally:
            if generation == self._generation:
                self._state = DriverState.IDLE
                self._token = None
                self._sync_listener()

        if result.outcome is not LoadOutcome.STALE:
            await run_hooks(self, AFTER_LOAD, result)
        return result

    async def _call_loader(self, token: CancellationToken) -> None:
        if self._timeout is None:
            await self._fetch_more(token)
            return
        try:
            await asyncio.wait_for(self._fetch_more(token), self._timeout)
        except asyncio.TimeoutError:
            token.cancel()
            raise

    def _settle(
        self,
        generation: int,
        token: CancellationToken,
        error: BaseException | None,
    ) -> LoadResult:
        """Apply a finished load to the driver, unless it has gone stale."""
        if generation != self._generation:
            logger.debug("Discarding stale load from generation %d", generation)
            return LoadResult(LoadOutcome.STALE, self._revealed_chunks, error)

        if isinstance(error, LoadCancelled) or (error is None and token.cancelled):
            result = LoadResult(LoadOutcome.CANCELLED, self._revealed_chunks, error)
        elif error is not None:
            logger.warning("Load more failed: %s", error)
            result = LoadResult(LoadOutcome.FAILED, self._revealed_chunks, error)
            self._error = result.reason
        else:
            self._revealed_chunks += 1
            result = LoadResult(LoadOutcome.LOADED, self._revealed_chunks)

        self._last_result = result
        return result

    def reset(self) -> None:
        """Collapse back to the first chunk, abandoning any in-flight load."""
        self._abandon_inflight()
        self._revealed_chunks = 1
        self._state = DriverState.IDLE
        self._error = None
        self._sync_listener()

    def set_items(self, items: Sequence[T]) -> None:
        """Replace the backing sequence (e.g. after a filter) and reset."""
        self._items = items
        self.reset()

    def close(self) -> None:
        """Tear the driver down: cancel pending work and stop listening."""
        self._abandon_inflight()
        self._state = DriverState.IDLE
        self._closed = True
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None
        self.detach()

    def _abandon_inflight(self) -> None:
        self._generation += 1
        if self._token is not None:
            self._token.cancel()
            self._token = None

    # --- Scroll trigger ---

    def attach(self, surface: ScrollSurface) -> None:
        """Start watching a scroll surface for the bottom-of-list trigger."""
        self.detach()
        self._surface = surface
        self._sync_listener()

    def detach(self) -> None:
        if self._surface is not None and self._listening:
            self._surface.remove_listener(self._listener)
        self._listening = False
        self._surface = None

    def check_position(self) -> bool:
        """Measure the attached surface and schedule a load near the bottom.

        Returns:
            True if a load was scheduled
        """
        if self._surface is None or self._state is not DriverState.IDLE or not self.has_more:
            return False
        if self._pending is not None and not self._pending.done():
            return False
        if self._surface.distance_to_bottom() > self._threshold:
            return False

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No running event loop; scroll triggered load skipped")
            return False
        self._pending = loop.create_task(self.load_more())
        self._pending.add_done_callback(self._log_scheduled_failure)
        return True

    @staticmethod
    def _log_scheduled_failure(task: asyncio.Task) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Scroll triggered load raised: %s", exc, exc_info=exc)

    def _handle_scroll(self) -> None:
        self.check_position()

    def _sync_listener(self) -> None:
        """Install the scroll listener only while idle with more to load."""
        if self._surface is None:
            return
        wanted = not self._closed and self._state is DriverState.IDLE and self.has_more
        if wanted and not self._listening:
            self._surface.add_listener(self._listener)
            self._listening = True
        elif not wanted and self._listening:
            self._surface.remove_listener(self._listener)
            self._listening = False
