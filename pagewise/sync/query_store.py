from __future__ import annotations

import logging
from typing import Iterable, Protocol
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from pagewise.utils.types import QueryPairs

logger = logging.getLogger(__name__)


class QueryStore(Protocol):
    """Key/value view of a document's query string.

    ``replace`` swaps the whole query string in place (history replace, not
    push), so pagination never creates back-button stops.
    """

    def read(self, key: str) -> str | None: ...

    def snapshot(self) -> QueryPairs: ...

    def replace(self, pairs: Iterable[tuple[str, str]]) -> None: ...


def _first(pairs: QueryPairs, key: str) -> str | None:
    for k, v in pairs:
        if k == key:
            return v
    return None


class InMemoryQueryStore:
    """Query store backed by a list of pairs. Records every replace."""

    def __init__(self, query: str | Iterable[tuple[str, str]] = "") -> None:
        if isinstance(query, str):
            self._pairs: QueryPairs = parse_qsl(query.lstrip("?"), keep_blank_values=True)
        else:
            self._pairs = list(query)
        self.history: list[str] = []

    @property
    def query_string(self) -> str:
        return urlencode(self._pairs)

    def read(self, key: str) -> str | None:
        return _first(self._pairs, key)

    def snapshot(self) -> QueryPairs:
        return list(self._pairs)

    def replace(self, pairs: Iterable[tuple[str, str]]) -> None:
        self._pairs = list(pairs)
        self.history.append(self.query_string)


class URLQueryStore:
    """Query store over a full URL. Path and fragment are left untouched."""

    def __init__(self, url: str) -> None:
        self._parts = urlsplit(url)
        self._pairs: QueryPairs = parse_qsl(self._parts.query, keep_blank_values=True)

    @property
    def url(self) -> str:
        return urlunsplit(self._parts._replace(query=urlencode(self._pairs)))

    def read(self, key: str) -> str | None:
        return _first(self._pairs, key)

    def snapshot(self) -> QueryPairs:
        return list(self._pairs)

    def replace(self, pairs: Iterable[tuple[str, str]]) -> None:
        self._pairs = list(pairs)
        logger.debug("Replaced query string: %s", self.url)
