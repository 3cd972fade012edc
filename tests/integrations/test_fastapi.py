from __future__ import annotations

from fastapi import Depends, FastAPI, Request
from fastapi.testclient import TestClient

from pagewise import GAP, PaginationController, PaginationParams, URLBinding
from pagewise.integrations.fastapi import (
    PaginatedResponse,
    RequestQueryStore,
    controller_from_request,
    page_links,
    pagination_params,
    serialize_window,
)

ARTICLES = [{"title": f"Post {i}"} for i in range(1, 96)]


def _app() -> FastAPI:
    app = FastAPI()

    @app.get("/params")
    async def params(p: PaginationParams = Depends(pagination_params(max_per_page=50))):
        return p.as_query()

    @app.get("/articles")
    async def articles(request: Request):
        pager = controller_from_request(request, total_items=len(ARTICLES))
        body = PaginatedResponse[dict].from_controller(pager, ARTICLES).model_dump()
        body["links"] = page_links(pager, request.url).model_dump()
        return body

    return app


def test_pagination_params_defaults():
    client = TestClient(_app())
    assert client.get("/params").json() == {"page": 1, "per_page": 10, "offset": 0}


def test_pagination_params_malformed_values_fall_back():
    client = TestClient(_app())
    resp = client.get("/params", params={"page": "abc", "per_page": "-3"})
    assert resp.status_code == 200
    assert resp.json() == {"page": 1, "per_page": 10, "offset": 0}


def test_pagination_params_caps_page_size():
    client = TestClient(_app())
    assert client.get("/params?page=2&per_page=999").json() == {
        "page": 2,
        "per_page": 50,
        "offset": 50,
    }


def test_articles_endpoint():
    client = TestClient(_app())
    body = client.get("/articles?page=5&tag=flask").json()
    assert body["page"] == 5
    assert body["total_pages"] == 10
    assert body["items"][0] == {"title": "Post 41"}
    assert body["window"] == [1, "...", 3, 4, 5, 6, 7, "...", 10]
    assert body["links"]["previous"] == "http://testserver/articles?tag=flask&page=4"
    assert body["links"]["first"] == "http://testserver/articles?tag=flask"


def test_articles_endpoint_clamps_page():
    client = TestClient(_app())
    body = client.get("/articles?page=400").json()
    assert body["page"] == 10
    assert body["has_next"] is False
    assert len(body["items"]) == 5


def test_request_query_store():
    store = RequestQueryStore("http://blog.test/tags/python?page=2&sort=new")
    assert store.read("page") == "2"
    store.replace([("sort", "new"), ("page", "3")])
    assert str(store.url) == "http://blog.test/tags/python?sort=new&page=3"


def test_serialize_window():
    assert serialize_window([1, GAP, 9, 10]) == [1, "...", 9, 10]


def test_paginated_response_from_controller():
    pager = PaginationController(len(ARTICLES), initial_page=2)
    resp = PaginatedResponse[dict].from_controller(pager, ARTICLES)
    assert resp.items == ARTICLES[10:20]
    assert resp.page == 2
    assert resp.per_page == 10
    assert resp.has_prev is True


def test_page_links_on_first_page():
    pager = PaginationController(95)
    links = page_links(pager, "http://blog.test/posts")
    assert links.first is None
    assert links.previous is None
    assert links.next == "http://blog.test/posts?page=2"
    assert links.last == "http://blog.test/posts?page=10"
    assert [link.label for link in links.pages] == ["1", "2", "3", "4", "5", "...", "10"]
    assert links.pages[0].current is True
    assert links.pages[0].href == "http://blog.test/posts"
    assert links.pages[5].href is None


def test_page_links_keep_non_default_size():
    pager = PaginationController(95, items_per_page=20, initial_page=2)
    links = page_links(pager, "http://blog.test/posts?page=2&per_page=20")
    assert links.next == "http://blog.test/posts?page=3&per_page=20"
    assert links.first == "http://blog.test/posts?per_page=20"


def test_page_links_custom_binding():
    pager = PaginationController(95, initial_page=3)
    binding = URLBinding(page_param="p", per_page_param="n")
    links = page_links(pager, "http://blog.test/posts?p=3", binding=binding)
    assert links.next == "http://blog.test/posts?p=4"


def test_pagination_params_oversized_page_falls_back():
    client = TestClient(_app())
    resp = client.get("/params", params={"page": "9" * 5000, "per_page": "20"})
    assert resp.status_code == 200
    assert resp.json() == {"page": 1, "per_page": 20, "offset": 0}


class ShopPager(PaginationController):
    class Settings:
        items_per_page = 24
        max_items_per_page = 48
        page_param = "p"


def test_pagination_params_cap_from_controller_settings():
    app = FastAPI()

    @app.get("/products")
    async def products(p: PaginationParams = Depends(pagination_params(controller_class=ShopPager))):
        return p.as_query()

    client = TestClient(app)
    assert client.get("/products").json() == {"page": 1, "per_page": 24, "offset": 0}
    assert client.get("/products?p=2&per_page=500").json() == {
        "page": 2,
        "per_page": 48,
        "offset": 48,
    }


def test_pagination_params_explicit_cap_wins_over_settings():
    app = FastAPI()

    @app.get("/products")
    async def products(
        p: PaginationParams = Depends(pagination_params(max_per_page=30, controller_class=ShopPager)),
    ):
        return p.as_query()

    client = TestClient(app)
    assert client.get("/products?per_page=500").json()["per_page"] == 30


def test_page_links_use_controller_settings_names():
    pager = ShopPager(200, initial_page=2)
    links = page_links(pager, "http://shop.test/products?p=2")
    assert links.next == "http://shop.test/products?p=3"
    assert links.first == "http://shop.test/products"
