from __future__ import annotations

import asyncio
from typing import Any, Callable

from pagewise.utils.types import Unsubscribe

# Hook type constants
PAGE_CHANGE = "page_change"
ITEMS_PER_PAGE_CHANGE = "items_per_page_change"
TOTAL_CHANGE = "total_change"
BEFORE_LOAD = "before_load"
AFTER_LOAD = "after_load"

_ALL_HOOKS = (PAGE_CHANGE, ITEMS_PER_PAGE_CHANGE, TOTAL_CHANGE, BEFORE_LOAD, AFTER_LOAD)


def _make_hook_decorator(hook_type: str) -> Callable:
    """Decorator factory tagging a method with the change it reacts to."""

    def decorator(fn: Callable) -> Callable:
        fn._pagewise_hooks = (*getattr(fn, "_pagewise_hooks", ()), hook_type)
        return fn

    return decorator


on_page_change = _make_hook_decorator(PAGE_CHANGE)
on_items_per_page_change = _make_hook_decorator(ITEMS_PER_PAGE_CHANGE)
on_total_change = _make_hook_decorator(TOTAL_CHANGE)
before_load = _make_hook_decorator(BEFORE_LOAD)
after_load = _make_hook_decorator(AFTER_LOAD)


def collect_hooks(cls: type) -> dict[str, list[str]]:
    """Map each hook type to the tagged method names of ``cls``.

    Base class hooks run first. Redefining a hook in a subclass keeps the
    base class position, and the subclass body is what gets called.
    """
    names: dict[str, dict[str, None]] = {hook_type: {} for hook_type in _ALL_HOOKS}
    for klass in reversed(cls.__mro__):
        for name, member in vars(klass).items():
            for hook_type in getattr(member, "_pagewise_hooks", ()):
                names[hook_type].setdefault(name)
    return {hook_type: list(ordered) for hook_type, ordered in names.items()}


def fire_hooks(instance: Any, hook_type: str, *args: Any) -> None:
    """Run all synchronous hooks of the given type on an instance."""
    hook_methods = instance.__class__._hooks.get(hook_type, [])
    for method_name in hook_methods:
        getattr(instance, method_name)(*args)


async def run_hooks(instance: Any, hook_type: str, *args: Any) -> None:
    """Run all hooks of the given type, awaiting coroutine hooks."""
    hook_methods = instance.__class__._hooks.get(hook_type, [])
    for method_name in hook_methods:
        method = getattr(instance, method_name)
        result = method(*args)
        if asyncio.iscoroutine(result):
            await result


class Subscribers:
    """Ordered list of change callbacks with unsubscribe handles."""

    def __init__(self) -> None:
        self._callbacks: list[Callable[..., Any]] = []

    def __len__(self) -> int:
        return len(self._callbacks)

    def subscribe(self, callback: Callable[..., Any]) -> Unsubscribe:
        """Register a callback. Returns a function that removes it again."""
        self._callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return unsubscribe

    def notify(self, *args: Any) -> None:
        # Copy so callbacks may unsubscribe while being notified
        for callback in list(self._callbacks):
            callback(*args)
