import pytest

from yamlbench.events import Marker, ParseError, Span, format_event, main, parse_events


def _formatted(text):
    return [format_event(event) for event, _ in parse_events(text)]


def test_stream_bounds_and_implicit_document():
    formatted = _formatted("a: b")
    assert formatted[0] == "StreamStart"
    assert formatted[1] == "DocumentStart(false)"
    assert formatted[-1] == "StreamEnd"
    assert "MappingEnd" in formatted
    assert "DocumentEnd" in formatted


def test_explicit_document_start():
    assert "DocumentStart(true)" in _formatted("---\nfoo")


def test_empty_input_has_only_stream_events():
    assert _formatted("") == ["StreamStart", "StreamEnd"]


def test_scalar_spans_cover_their_text():
    text = "foo: bar\nbaz: qux"
    scalars = [(e, s) for e, s in parse_events(text) if format_event(e).startswith("Scalar")]
    assert [e.value for e, _ in scalars] == ["foo", "bar", "baz", "qux"]
    for event, span in scalars:
        assert text[span.start.index : span.end.index] == event.value
        assert len(span) == len(event.value)


def test_lines_are_one_based_and_columns_zero_based():
    events = parse_events("a: b\nc: d")
    (span,) = [s for e, s in events if getattr(e, "value", None) == "c"]
    assert span.start.line == 2
    assert span.start.col == 0


def test_scalar_styles_are_named():
    formatted = _formatted("- plain\n- 'squote'\n- \"dquote\"\n- |\n  lit\n")
    scalars = [f for f in formatted if f.startswith("Scalar")]
    assert "Plain" in scalars[0]
    assert "SingleQuoted" in scalars[1]
    assert "DoubleQuoted" in scalars[2]
    assert "Literal" in scalars[3]


def test_anchor_and_alias_are_formatted():
    formatted = _formatted("a: &x 1\nb: *x")
    assert any("&x" in f for f in formatted if f.startswith("Scalar"))
    assert any(f.startswith("Alias(") and "x" in f for f in formatted)


def test_span_helpers():
    span = Span(Marker(2, 1, 2), Marker(6, 1, 6))
    assert len(span) == 4
    assert not span.is_empty
    empty = Span(Marker(6, 1, 6), Marker(6, 1, 6))
    assert empty.is_empty


def test_error_message_carries_position():
    with pytest.raises(ParseError) as info:
        parse_events("[a")
    err = info.value
    m = err.marker
    assert str(err) == f"{err.info} at char {m.index} line {m.line} column {m.col}"


def test_misplaced_bracket_is_an_error():
    with pytest.raises(ParseError) as info:
        parse_events("key: [1, 2]]\n")
    assert info.value.marker.line == 1


def test_main_dumps_events(tmp_path, capsys):
    path = tmp_path / "in.yaml"
    path.write_text("a: b\n", encoding="utf-8")
    assert main([str(path)]) == 0
    err = capsys.readouterr().err
    assert "StreamStart" in err
    assert "StreamEnd" in err


def test_main_reports_parse_error(tmp_path, capsys):
    path = tmp_path / "bad.yaml"
    path.write_text("[a", encoding="utf-8")
    assert main([str(path)]) == 1
    assert " at char " in capsys.readouterr().err