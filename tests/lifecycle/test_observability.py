import asyncio
import logging

from pagewise import InfiniteScrollDriver, LoadOutcome, PaginationController
from pagewise.lifecycle.observability import (
    PaginationEvent,
    add_listener,
    clear_events,
    disable_tracing,
    enable_tracing,
    get_events,
    remove_listener,
    span_attributes,
)


class TestObservability:
    def test_tracing_disabled_by_default(self):
        PaginationController(95).next_page()
        assert get_events() == []

    def test_page_change_event(self):
        enable_tracing(capture_events=True)
        PaginationController(95).go_to_page(4)
        events = get_events()
        assert len(events) == 1
        assert events[0].action == "page_change"
        assert events[0].source == "PaginationController"
        assert events[0].data == {"from": 1, "to": 4}

    def test_per_page_change_event(self):
        enable_tracing(capture_events=True)
        PaginationController(95, initial_page=3).set_items_per_page(20)
        actions = [e.action for e in get_events()]
        assert actions == ["per_page_change", "page_change"]
        assert get_events()[0].data == {"from": 10, "to": 20, "total_pages": 5}

    def test_disable_tracing_clears_state(self):
        enable_tracing(capture_events=True)
        PaginationController(95).next_page()
        assert len(get_events()) > 0
        disable_tracing()
        assert len(get_events()) == 0

    def test_clear_events(self):
        enable_tracing(capture_events=True)
        PaginationController(95).next_page()
        clear_events()
        assert get_events() == []

    def test_listener_receives_events(self):
        received = []

        def listener(event: PaginationEvent):
            received.append(event)

        enable_tracing()
        add_listener(listener)
        PaginationController(95).last_page()
        assert [e.action for e in received] == ["page_change"]

        remove_listener(listener)
        PaginationController(95).last_page()
        assert len(received) == 1

    async def test_load_event_has_duration_and_outcome(self):
        enable_tracing(capture_events=True)
        driver = InfiniteScrollDriver(list(range(30)), items_per_page=10)
        await driver.load_more()
        events = [e for e in get_events() if e.action == "load_more"]
        assert len(events) == 1
        assert events[0].duration_ms >= 0
        assert events[0].data == {"chunk": 2, "outcome": "loaded"}

    async def test_slow_load_logs_warning(self, caplog):
        async def fetch_more(token):
            await asyncio.sleep(0.01)

        enable_tracing(slow_load_ms=0.0)
        driver = InfiniteScrollDriver([], fetch_more=fetch_more, has_more=True)
        with caplog.at_level(logging.WARNING, logger="pagewise"):
            await driver.load_more()
        assert any("Slow load" in record.message for record in caplog.records)

    async def test_failed_load_is_logged(self, caplog):
        async def fetch_more(token):
            raise RuntimeError("timeout talking to CMS")

        driver = InfiniteScrollDriver([], fetch_more=fetch_more, has_more=True)
        with caplog.at_level(logging.WARNING, logger="pagewise"):
            await driver.load_more()
        assert any("Load more failed" in record.message for record in caplog.records)


class TestSpanAttributes:
    def test_page_change_attributes(self):
        event = PaginationEvent(action="page_change", source="ArticlePager", data={"from": 2, "to": 5})
        assert span_attributes(event) == {
            "pagewise.source": "ArticlePager",
            "pagewise.action": "page_change",
            "pagewise.page.from": 2,
            "pagewise.page.to": 5,
        }

    def test_load_attributes(self):
        event = PaginationEvent(
            action="load_more",
            source="FeedDriver",
            data={"chunk": 3, "outcome": LoadOutcome.FAILED},
            duration_ms=12.34567,
        )
        attributes = span_attributes(event)
        assert attributes["pagewise.load.chunk"] == 3
        assert attributes["pagewise.load.outcome"] == "failed"
        assert attributes["pagewise.load.duration_ms"] == 12.346

    def test_non_scalar_values_dropped(self):
        event = PaginationEvent(action="per_page_change", source="P", data={"to": 20, "pages": [1, 2]})
        attributes = span_attributes(event)
        assert attributes["pagewise.per_page.to"] == 20
        assert "pagewise.per_page.pages" not in attributes
