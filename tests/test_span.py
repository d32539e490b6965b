import pytest

from pegkit.position import Position
from pegkit.span import Span


def test_get():
    text = "abc123abc"
    span = Span(text, 3, len(text))
    assert span.as_str() == "123abc"
    assert span.start_pos.input is text

    span1 = span.get(None, 3)
    assert span1 is not None
    assert span1.start_pos.input is text
    assert span1.as_str() == "123"

    span2 = span.get()
    assert span2 is not None
    assert span2.start_pos.input is text
    assert span2.as_str() == "123abc"

    span3 = span.get(3)
    assert span3 is not None
    assert span3.start_pos.input is text
    assert span3.as_str() == "abc"

    span4 = span.get(0, 0)
    assert span4 is not None
    assert span4.start_pos.input is text
    assert span4.as_str() == ""


def test_get_fails():
    text = "abc"
    span = Span(text, 0, len(text))
    assert span.get(0, 100) is None
    assert span.get(100, 200) is None


def test_get_doc_example():
    text = "Hello World!"
    world = Span(text, 6, len(text))
    orl = world.get(1, 4)
    assert orl is not None
    assert orl.as_str() == "orl"
    assert (orl.start, orl.end) == (7, 10)


def test_get_rejects_split_character():
    text = "d嗨"
    span = Span(text, 0, len(text.encode("utf-8")))
    assert span.get(0, 2) is None
    assert span.get(1).as_str() == "嗨"


def test_new_invalid():
    text = "Hello!"
    with pytest.raises(ValueError):
        Span(text, 100, 0)
    assert Span(text, 0, len(text)).as_str() == "Hello!"


def test_new_rejects_non_boundary():
    with pytest.raises(ValueError):
        Span("嗨", 0, 1)


def test_span_comp():
    text = "abc\ndef\nghi"
    span = Span(text, 1, 7)
    with pytest.raises(ValueError):
        Span(text, 50, 51)
    span3 = Span(text, 0, 8)
    assert span != span3
    assert span == Span(text, 1, 7)


def test_split():
    text = "a"
    start = Position.from_start(text)
    end = Position.from_start(text)
    assert end.skip(1)
    span = start.span(end)
    assert span.split() == (start, end)


def test_start_end_positions():
    text = "ab"
    start = Position.from_start(text)
    span = start.span(Position.from_start(text))
    assert span.start == 0
    assert span.end == 0
    assert span.start_pos == start
    assert span.end_pos == start


def test_lines_mid():
    text = "abc\ndef\nghi"
    span = Span(text, 1, 7)
    lines = list(span.lines())
    lines_span = [s.as_str() for s in span.lines_span()]
    assert len(lines) == 2
    assert lines[0] == "abc\n"
    assert lines[1] == "def\n"
    assert lines == lines_span


def test_lines_eof():
    text = "abc\ndef\nghi"
    span = Span(text, 5, 11)
    assert span.end_pos.at_end()
    assert span.end == 11
    lines = list(span.lines())
    lines_span = [s.as_str() for s in span.lines_span()]
    assert len(lines) == 2
    assert lines[0] == "def\n"
    assert lines[1] == "ghi"
    assert lines == lines_span


def test_lines_span():
    text = "abc\ndef\nghi"
    span = Span(text, 1, 7)
    lines_span = list(span.lines_span())
    lines = list(span.lines())
    assert len(lines_span) == 2
    assert lines_span[0] == Span(text, 0, 4)
    assert lines_span[1] == Span(text, 4, 8)
    assert [s.as_str() for s in lines_span] == lines


def test_lines_doc_example():
    text = "a\nb\nc"
    span = Span(text, 2, 5)
    assert list(span.lines()) == ["b\n", "c"]
    assert list(span.lines_span()) == [Span(text, 2, 4), Span(text, 4, 5)]


def test_hash_consistent_with_eq():
    text = "abc"
    spans = {Span(text, 0, 1), Span(text, 0, 1), Span(text, 1, 2)}
    assert len(spans) == 2