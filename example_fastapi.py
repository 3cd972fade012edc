"""
Pagewise with FastAPI Example

Demonstrates serving a paginated article listing with page links.

Features covered:
- Lenient page/per_page parsing as a dependency
- Controllers positioned from the request URL
- Page window and navigation hrefs in the response

Run with:
  pip install uvicorn
  uvicorn example_fastapi:app --reload

Then visit: http://localhost:8000/articles?page=3&tag=python
"""

from fastapi import Depends, FastAPI, Request

from pagewise import PaginationParams
from pagewise.integrations.fastapi import (
    PaginatedResponse,
    controller_from_request,
    page_links,
    pagination_params,
)

# ============================================================================
# 1. CONTENT SOURCE
# ============================================================================

ARTICLES = [
    {"id": i, "title": f"Article #{i}", "tag": "python" if i % 3 else "web"}
    for i in range(1, 251)
]

app = FastAPI(title="Pagewise Example API")


# ============================================================================
# 2. ENDPOINTS
# ============================================================================


@app.get("/articles")
async def list_articles(request: Request, tag: str | None = None):
    """Page through articles, optionally filtered by tag."""
    articles = [a for a in ARTICLES if tag is None or a["tag"] == tag]
    pager = controller_from_request(request, total_items=len(articles))

    body = PaginatedResponse[dict].from_controller(pager, articles).model_dump()
    body["info"] = pager.get_page_info().as_dict()
    body["links"] = page_links(pager, request.url).model_dump()
    return body


@app.get("/wp-params")
async def wordpress_params(params: PaginationParams = Depends(pagination_params(max_per_page=100))):
    """Arguments to forward to a WordPress REST posts query."""
    return params.as_query()
