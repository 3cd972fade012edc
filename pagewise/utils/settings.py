"""Settings resolution utilities for controller and driver configuration."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, model_validator

from pagewise.utils.types import (
    DEFAULT_ITEMS_PER_PAGE,
    DEFAULT_MAX_PAGES_TO_SHOW,
    DEFAULT_PAGE_PARAM,
    DEFAULT_PER_PAGE_PARAM,
    DEFAULT_SCROLL_THRESHOLD,
)


class PaginationSettings(BaseModel):
    """Validated pagination configuration.

    Values come from an inner ``Settings`` class on a controller or driver
    subclass; anything not declared there keeps the package default.
    """

    model_config = {"frozen": True}

    items_per_page: int = Field(default=DEFAULT_ITEMS_PER_PAGE, ge=1)
    max_pages_to_show: int = Field(default=DEFAULT_MAX_PAGES_TO_SHOW, ge=1)
    page_param: str = Field(default=DEFAULT_PAGE_PARAM, min_length=1)
    per_page_param: str = Field(default=DEFAULT_PER_PAGE_PARAM, min_length=1)
    max_items_per_page: int = Field(default=100, ge=1)
    scroll_threshold: float = Field(default=DEFAULT_SCROLL_THRESHOLD, ge=0)
    load_timeout: float | None = Field(default=None, gt=0)

    @model_validator(mode="after")
    def _check_param_names(self) -> PaginationSettings:
        if self.page_param == self.per_page_param:
            raise ValueError("page_param and per_page_param must differ")
        return self


_SETTING_NAMES = tuple(PaginationSettings.model_fields)


class SettingsResolver:
    """Resolves pagination settings from an inner Settings class."""

    @staticmethod
    def resolve(cls: type) -> PaginationSettings:
        """Build validated settings for a class.

        Args:
            cls: Controller or driver class

        Returns:
            PaginationSettings with the class overrides applied
        """
        settings = getattr(cls, "Settings", None)
        overrides: dict[str, Any] = {}
        if settings is not None:
            for name in _SETTING_NAMES:
                if hasattr(settings, name):
                    overrides[name] = getattr(settings, name)
        return PaginationSettings(**overrides)
