"""Tests for candidate selection."""

from svg2gif.batch.filters import CandidateFilter

from fakes import obj


def test_accepts_real_svg_above_minimum():
    f = CandidateFilter(".svg", 1024)
    assert f.accepts(obj("chart.svg", 2000))


def test_size_boundary_is_strict():
    f = CandidateFilter(".svg", 1024)
    assert not f.accepts(obj("chart.svg", 1024))
    assert f.accepts(obj("chart.svg", 1025))
    assert not f.accepts(obj("chart.svg", 0))


def test_extension_match_is_case_sensitive():
    f = CandidateFilter(".svg", 1024)
    assert not f.accepts(obj("chart.SVG", 5000))
    assert not f.accepts(obj("chart.svg.bak", 5000))
    assert not f.accepts(obj("chart.png", 5000))
    assert f.accepts(obj("nested/dir/chart.svg", 5000))


def test_directory_markers_rejected():
    f = CandidateFilter(".svg", 0)
    assert not f.accepts(obj("folder.svg/", 4096, is_directory=True))


def test_select_preserves_order_and_handles_empty():
    f = CandidateFilter(".svg", 1024)
    objects = [
        obj("b.svg", 3000),
        obj("small.svg", 500),
        obj("a.svg", 2000),
        obj("notes.txt", 9000),
        obj("c.svg", 1025),
    ]
    assert [o.key for o in f.select(objects)] == ["b.svg", "a.svg", "c.svg"]
    assert f.select([]) == []


def test_thresholds_are_configurable():
    f = CandidateFilter(".xml", 10)
    assert f.accepts(obj("doc.xml", 11))
    assert not f.accepts(obj("doc.svg", 11))
