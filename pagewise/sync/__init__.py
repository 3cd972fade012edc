from pagewise.sync.query_store import QueryStore, InMemoryQueryStore, URLQueryStore
from pagewise.sync.url_binding import (
    URLBinding,
    URLSyncAdapter,
    parse_positive_int,
    resolve_binding,
)

__all__ = [
    "QueryStore",
    "InMemoryQueryStore",
    "URLQueryStore",
    "URLBinding",
    "URLSyncAdapter",
    "parse_positive_int",
    "resolve_binding",
]
