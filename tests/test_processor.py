"""End-to-end tests for the batch processor with in-memory fakes."""

import logging

import pytest

from svg2gif.batch.processor import BatchProcessor
from svg2gif.config import AppConfig

from fakes import FakeConverter, FakeGateway, obj, page


def make_config(tmp_path, k=4, upload=False):
    config = AppConfig()
    config.output_path = str(tmp_path)
    config.conversion.max_concurrent_jobs = k
    config.conversion.upload_results = upload
    return config


def make_processor(config, gateway, converter):
    return BatchProcessor(config, gateway, converter=converter, logger=logging.getLogger("tests.processor"))


def test_only_eligible_objects_are_converted(tmp_path):
    gateway = FakeGateway(
        [page(obj("chart.svg", 2000), obj("small.svg", 500))],
        blobs={"chart.svg": b"<svg>chart</svg>", "small.svg": b"<svg/>"},
    )

    stats = make_processor(make_config(tmp_path), gateway, FakeConverter()).run_batch_job()

    assert sorted(p.name for p in tmp_path.iterdir()) == ["chart.gif"]
    assert [e for e in gateway.events if e[0] == "download"] == [("download", "chart.svg")]
    assert stats.pages == 1
    assert stats.listed == 2
    assert stats.candidates == 1
    assert stats.converted == 1
    assert stats.failed == 0
    assert stats.skipped == 1


def test_pages_do_not_overlap(tmp_path):
    events = []
    first = [obj(f"p1/{i}.svg") for i in range(6)]
    second = [obj(f"p2/{i}.svg") for i in range(3)]
    blobs = {o.key: o.key.encode() for o in first + second}
    gateway = FakeGateway(
        [page(*first, next_token="t1"), page(*second)],
        blobs=blobs,
        events=events,
    )
    converter = FakeConverter(delay=0.02, events=events)

    stats = make_processor(make_config(tmp_path, k=3), gateway, converter).run_batch_job()

    assert gateway.tokens_requested == [None, "t1"]
    last_first_page_done = max(
        i for i, (kind, value) in enumerate(events) if kind == "done" and value.startswith(b"p1/")
    )
    first_second_page_download = min(
        i for i, (kind, value) in enumerate(events) if kind == "download" and value.startswith("p2/")
    )
    assert last_first_page_done < first_second_page_download
    assert stats.converted == 9


def test_failure_does_not_stop_siblings_or_next_page(tmp_path):
    gateway = FakeGateway(
        [
            page(obj("a.svg"), obj("bad.svg"), obj("c.svg"), next_token="t1"),
            page(obj("d.svg")),
        ],
        blobs={"a.svg": b"a", "bad.svg": b"BAD", "c.svg": b"c", "d.svg": b"d"},
    )

    stats = make_processor(make_config(tmp_path, k=2), gateway, FakeConverter()).run_batch_job()

    assert sorted(p.name for p in tmp_path.iterdir()) == ["a.gif", "c.gif", "d.gif"]
    assert stats.converted == 3
    assert stats.failed == 1


def test_concurrency_ceiling_spans_the_run(tmp_path):
    objects = [obj(f"{i}.svg") for i in range(12)]
    gateway = FakeGateway(
        [page(*objects[:6], next_token="t1"), page(*objects[6:])],
        blobs={o.key: o.key.encode() for o in objects},
    )
    converter = FakeConverter(delay=0.01)

    make_processor(make_config(tmp_path, k=2), gateway, converter).run_batch_job()

    assert 1 <= converter.peak <= 2


def test_empty_pages_advance(tmp_path):
    gateway = FakeGateway(
        [page(obj("dir/", 0, is_directory=True), next_token="t1"), page(next_token="t2"), page()],
    )

    stats = make_processor(make_config(tmp_path), gateway, FakeConverter()).run_batch_job()

    assert gateway.tokens_requested == [None, "t1", "t2"]
    assert stats.pages == 3
    assert stats.candidates == 0


def test_listing_error_aborts_run(tmp_path):
    class FailingGateway(FakeGateway):
        def list_page(self, continuation_token=None):
            if continuation_token == "t1":
                raise ConnectionError("listing failed")
            return super().list_page(continuation_token)

    gateway = FailingGateway([page(obj("a.svg"), next_token="t1")], blobs={"a.svg": b"a"})

    with pytest.raises(ConnectionError):
        make_processor(make_config(tmp_path), gateway, FakeConverter()).run_batch_job()

    assert (tmp_path / "a.gif").exists()


def test_upload_enabled(tmp_path):
    gateway = FakeGateway([page(obj("a.svg"))], blobs={"a.svg": b"a"})

    make_processor(make_config(tmp_path, upload=True), gateway, FakeConverter()).run_batch_job()

    assert gateway.uploads == {"a.gif": (b"GIF89aa", "image/gif")}
