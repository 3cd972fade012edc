import dataclasses

import pytest

from pagewise import Page, PageInfo, PaginationParams


class TestPageInfo:
    def test_as_dict(self):
        assert PageInfo(from_item=1, to_item=10, total=95).as_dict() == {
            "from": 1,
            "to": 10,
            "total": 95,
        }

    def test_describe_uses_thousands_separator(self):
        info = PageInfo(from_item=1001, to_item=1010, total=12500)
        assert info.describe() == "Showing 1001 to 1010 of 12,500 entries"


class TestPaginationParams:
    def test_as_query(self):
        params = PaginationParams(page=2, per_page=25, offset=25)
        assert params.as_query() == {"page": 2, "per_page": 25, "offset": 25}


def test_page_is_frozen():
    page = Page(items=[1], page=1, per_page=10, total=1, has_next=False, has_prev=False, total_pages=1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        page.page = 2
