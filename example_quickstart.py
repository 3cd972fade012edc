"""
Pagewise Quick Start Example

A simple example to get you started with Pagewise in 5 minutes.

Features covered:
- Page-based navigation with a compact page window
- Keeping the page in the URL query string
- Infinite scroll with an async "fetch more" loader

Run with: python example_quickstart.py
"""

import asyncio
import logging

from pagewise import (
    GAP,
    InfiniteScrollDriver,
    PaginationController,
    URLSyncAdapter,
    URLQueryStore,
    Viewport,
    enable_tracing,
    on_page_change,
)


# ============================================================================
# 1. DEFINE YOUR PAGERS
# ============================================================================


class ArticlePager(PaginationController):
    """Blog listing, twelve cards per page."""

    class Settings:
        items_per_page = 12
        max_pages_to_show = 5

    @on_page_change
    def announce(self, page):
        print(f"   -> now on page {page} of {self.total_pages}")


def render_window(pager: PaginationController) -> str:
    cells = []
    for entry in pager.page_window:
        if entry is GAP:
            cells.append("…")
        elif entry == pager.current_page:
            cells.append(f"[{entry}]")
        else:
            cells.append(str(entry))
    return " ".join(cells)


# ============================================================================
# 2. ASYNC MAIN FUNCTION
# ============================================================================


async def main():
    """Run the quickstart example."""
    articles = [f"Article #{i}" for i in range(1, 150)]

    # ====== PAGE-BASED NAVIGATION ======
    print("1️⃣  NAVIGATE - Page-based listing")
    pager = ArticlePager(total_items=len(articles))
    pager.go_to_page(6)
    print(f"   Window: {render_window(pager)}")
    print(f"   {pager.get_page_info().describe()}")
    print(f"   First card: {pager.get_page_items(articles)[0]}")

    # ====== PAGE SIZE CHANGE ======
    print("\n2️⃣  RESIZE - Switching to 24 per page keeps the reading position")
    pager.set_items_per_page(24)
    print(f"   {pager.get_page_info().describe()}")

    # ====== URL-BOUND STATE ======
    print("\n3️⃣  URL - Page state lives in the query string")
    store = URLQueryStore("https://blog.example.com/articles?page=3&tag=python")
    adapter = URLSyncAdapter(store)
    url_pager = adapter.attach(total_items=len(articles), controller_class=ArticlePager)
    url_pager.next_page()
    print(f"   URL after next_page(): {store.url}")
    url_pager.first_page()
    print(f"   URL after first_page(): {store.url}")

    # ====== INFINITE SCROLL ======
    print("\n4️⃣  SCROLL - Revealing the feed chunk by chunk")
    feed = articles[:20]

    async def fetch_more(token):
        await asyncio.sleep(0.05)
        token.raise_if_cancelled()
        start = len(feed)
        feed.extend(articles[start:start + 10])

    driver = InfiniteScrollDriver(feed, items_per_page=10, fetch_more=fetch_more)
    driver.has_more = True
    viewport = Viewport(height=800, content_height=2400)
    driver.attach(viewport)

    viewport.scroll_to(1500)  # within the trigger threshold
    await asyncio.sleep(0.1)
    print(f"   Visible after scrolling: {len(driver.visible_items)} items")

    result = await driver.load_more()
    print(f"   Explicit load: {result.outcome.value}, {len(driver.visible_items)} visible")

    driver.close()
    print("\n✅ All operations completed successfully!")


# ============================================================================
# 3. RUN THE EXAMPLE
# ============================================================================

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    enable_tracing(slow_load_ms=30.0)

    print("\n" + "=" * 60)
    print("PAGEWISE QUICKSTART EXAMPLE")
    print("=" * 60 + "\n")

    asyncio.run(main())
