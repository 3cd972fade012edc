from typing import Any, Callable

# Type aliases for better clarity
QueryPairs = list[tuple[str, str]]
Unsubscribe = Callable[[], None]

# Constants
DEFAULT_ITEMS_PER_PAGE = 10
DEFAULT_MAX_PAGES_TO_SHOW = 5
DEFAULT_PAGE_PARAM = "page"
DEFAULT_PER_PAGE_PARAM = "per_page"
DEFAULT_SCROLL_THRESHOLD = 200.0  # Distance to bottom (px) that triggers a load


def coerce_int(value: Any, fallback: int) -> int:
    """Coerce user or URL input to an int, returning fallback when impossible.

    Args:
        value: Raw input (int, float, numeric string, ...)
        fallback: Value returned when the input cannot be converted

    Returns:
        The converted integer, or fallback
    """
    if value is None or isinstance(value, bool):
        return fallback
    if isinstance(value, str):
        value = value.strip()
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        pass
    # Numeric strings like "2.0"
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return fallback


def clamp(value: int, lower: int, upper: int) -> int:
    """Clamp value into [lower, upper]; lower wins if the bounds cross."""
    return max(lower, min(value, upper))
