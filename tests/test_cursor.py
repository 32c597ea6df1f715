"""Tests for the pagination loop."""

import pytest

from svg2gif.batch.cursor import BatchCursor

from fakes import FakeGateway, obj, page


def test_single_page_without_token_lists_once():
    gateway = FakeGateway([page(obj("a.svg"))])
    seen = []

    count = BatchCursor().run(gateway.list_page, seen.append)

    assert count == 1
    assert gateway.tokens_requested == [None]
    assert len(seen) == 1


def test_follows_continuation_tokens_until_exhausted():
    pages = [
        page(obj("a.svg"), next_token="t1"),
        page(obj("b.svg"), next_token="t2"),
        page(obj("c.svg")),
    ]
    gateway = FakeGateway(pages)
    seen = []

    BatchCursor().run(gateway.list_page, seen.append)

    assert gateway.tokens_requested == [None, "t1", "t2"]
    assert [p.objects[0].key for p in seen] == ["a.svg", "b.svg", "c.svg"]


def test_empty_page_still_advances():
    gateway = FakeGateway([page(next_token="t1"), page(obj("b.svg"))])
    seen = []

    BatchCursor().run(gateway.list_page, seen.append)

    assert gateway.tokens_requested == [None, "t1"]
    assert len(seen) == 2


def test_page_is_processed_before_next_listing():
    order = []
    pages = [page(next_token="t1"), page()]

    def list_page(token):
        order.append(("list", token))
        return pages[len([o for o in order if o[0] == "list"]) - 1]

    BatchCursor().run(list_page, lambda p: order.append(("process", p.next_token)))

    assert order == [("list", None), ("process", "t1"), ("list", "t1"), ("process", None)]


def test_listing_error_propagates():
    calls = []

    def list_page(token):
        calls.append(token)
        if token == "t1":
            raise ConnectionError("listing failed")
        return page(obj("a.svg"), next_token="t1")

    processed = []
    with pytest.raises(ConnectionError):
        BatchCursor().run(list_page, processed.append)

    assert calls == [None, "t1"]
    assert len(processed) == 1


def test_empty_token_ends_the_loop():
    gateway = FakeGateway([page(obj("a.svg"), next_token=""), page(obj("b.svg"))])
    seen = []

    BatchCursor().run(gateway.list_page, seen.append)

    assert gateway.tokens_requested == [None]
    assert len(seen) == 1
