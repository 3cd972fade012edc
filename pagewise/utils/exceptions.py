class PagewiseError(Exception):
    """Base exception for all Pagewise errors."""


class LoadCancelled(PagewiseError):
    """Raised inside a loader when its cancellation token has been cancelled."""


class BindingConflict(PagewiseError, ValueError):
    """Raised when a URL binding is configured with unusable parameter names."""
