import pytest

from pagewise import disable_tracing
from pagewise.sync import InMemoryQueryStore


@pytest.fixture(autouse=True)
def reset_tracing():
    """Reset observability state between tests."""
    yield
    disable_tracing()


@pytest.fixture
def articles() -> list[str]:
    return [f"article_{i:03d}" for i in range(95)]


@pytest.fixture
def query_store() -> InMemoryQueryStore:
    return InMemoryQueryStore("?page=3&per_page=20&category=news")
