import pytest

from yamlbench.walk import (
    Action,
    NodeKind,
    WalkError,
    Walker,
    char_to_byte_index,
    load_first_document,
    main,
    parse_action,
    render,
    source_range,
)


def text_of(contents, node):
    r = source_range(contents, node.span)
    return contents.encode("utf-8")[r.start : r.stop].decode("utf-8")


def walker_for(contents):
    return Walker(load_first_document(contents))


MAPPING = "a: b\nc: d\n"


def test_mapping_is_loaded_with_pairs():
    root = load_first_document(MAPPING)
    assert root.kind is NodeKind.MAPPING
    assert [(text_of(MAPPING, k), text_of(MAPPING, v)) for k, v in root.pairs] == [
        ("a", "b"),
        ("c", "d"),
    ]


def test_sequence_is_loaded_with_items():
    contents = "- x\n- y\n"
    root = load_first_document(contents)
    assert root.kind is NodeKind.SEQUENCE
    assert [text_of(contents, item) for item in root.items] == ["x", "y"]


def test_flow_sequence_span_covers_brackets():
    contents = "[a, b]"
    root = load_first_document(contents)
    assert text_of(contents, root) == "[a, b]"


def test_only_first_document_is_loaded():
    contents = "first\n---\nsecond\n"
    root = load_first_document(contents)
    assert root.kind is NodeKind.SCALAR
    assert text_of(contents, root) == "first"


def test_empty_input_has_no_document():
    with pytest.raises(WalkError, match="No YAML document found"):
        load_first_document("")


def test_parse_error_is_reported():
    with pytest.raises(WalkError, match="line"):
        load_first_document("a: [1, 2")


def test_step_in_mapping_goes_to_first_value_then_next():
    walker = walker_for(MAPPING)
    walker.step_in()
    assert text_of(MAPPING, walker.current()) == "b"
    walker.next()
    assert text_of(MAPPING, walker.current()) == "d"
    with pytest.raises(WalkError, match="Reached end of the map"):
        walker.next()
    assert text_of(MAPPING, walker.current()) == "d"
    walker.prev()
    assert text_of(MAPPING, walker.current()) == "b"
    with pytest.raises(WalkError, match="Already at the beginning of the collection"):
        walker.prev()


def test_keys_stay_keys_when_moving():
    contents = "a: 1\nb: 2\nc: 3\n"
    walker = walker_for(contents)
    walker.step_in_key()
    assert text_of(contents, walker.current()) == "a"
    walker.next()
    walker.next()
    assert text_of(contents, walker.current()) == "c"
    walker.prev()
    assert text_of(contents, walker.current()) == "b"


def test_step_in_value_and_fin_return_to_root():
    walker = walker_for(MAPPING)
    root = walker.current()
    walker.step_in_value()
    assert text_of(MAPPING, walker.current()) == "b"
    walker.fin()
    assert walker.current() is root
    with pytest.raises(WalkError, match="Already at the top-level"):
        walker.fin()


def test_sequence_navigation_and_end():
    contents = "- x\n- y\n"
    walker = walker_for(contents)
    walker.step_in()
    assert text_of(contents, walker.current()) == "x"
    walker.next()
    assert text_of(contents, walker.current()) == "y"
    with pytest.raises(WalkError, match="Reached end of the sequence"):
        walker.next()


def test_sequence_rejects_key_and_value_moves():
    walker = walker_for("- x\n")
    with pytest.raises(WalkError, match="Not in a mapping"):
        walker.step_in_key()
    with pytest.raises(WalkError, match="Not in a mapping"):
        walker.step_in_value()


def test_scalar_root_rejects_moves():
    walker = walker_for("plain")
    with pytest.raises(WalkError, match="Not in a mapping or a sequence"):
        walker.step_in()
    with pytest.raises(WalkError, match="Can't next from top-level"):
        walker.next()
    with pytest.raises(WalkError, match="Can't prev from top-level"):
        walker.prev()


@pytest.mark.parametrize(
    ("contents", "message"),
    [("[]", "Sequence is empty"), ("{}", "Mapping is empty")],
)
def test_empty_collections(contents, message):
    walker = walker_for(contents)
    with pytest.raises(WalkError, match=message):
        walker.step_in()


def test_nested_navigation():
    contents = "foo:\n  - a\n  - bar:\n    - b\n    - c\n"
    walker = walker_for(contents)
    walker.apply(Action.STEP_IN)
    assert walker.current().kind is NodeKind.SEQUENCE
    walker.apply(Action.STEP_IN)
    assert text_of(contents, walker.current()) == "a"
    walker.apply(Action.NEXT)
    assert walker.current().kind is NodeKind.MAPPING
    walker.apply(Action.STEP_IN_VALUE)
    walker.apply(Action.STEP_IN)
    assert text_of(contents, walker.current()) == "b"
    walker.apply(Action.NEXT)
    assert text_of(contents, walker.current()) == "c"


def test_apply_stop_is_rejected():
    walker = walker_for(MAPPING)
    with pytest.raises(ValueError):
        walker.apply(Action.STOP)


@pytest.mark.parametrize(
    ("line", "action"),
    [
        ("q", Action.STOP),
        ("quit", Action.STOP),
        ("n", Action.NEXT),
        ("prev", Action.PREV),
        ("si", Action.STEP_IN),
        ("sk", Action.STEP_IN_KEY),
        ("sv", Action.STEP_IN_VALUE),
        ("up", Action.FIN),
        ("out", Action.FIN),
        ("nonsense", None),
    ],
)
def test_parse_action(line, action):
    assert parse_action(line) is action


def test_char_to_byte_index_counts_utf8_bytes():
    contents = "h\u00e9llo"
    assert char_to_byte_index(contents, 0) == 0
    assert char_to_byte_index(contents, 2) == 3
    assert char_to_byte_index(contents, 99) == len(contents.encode("utf-8"))


def test_source_range_of_wide_characters():
    contents = "emoji: \U0001F602\nnext: item\n"
    root = load_first_document(contents)
    _key, value = root.pairs[0]
    assert text_of(contents, value) == "\U0001F602"


def test_render_underlines_current_node():
    root = load_first_document(MAPPING)
    _key, value = root.pairs[1]
    output = render(MAPPING, value).split("\n")
    source_line = next(line for line in output if line.endswith("c: d"))
    caret_line = next(line for line in output if "Current node" in line)
    assert caret_line.index("^") == source_line.index("d")
    assert output[0] == "<input>"


def test_main_usage(capsys):
    assert main([]) == 0
    assert "Usage: walk <file.yaml>" in capsys.readouterr().err


def test_main_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "absent.yaml")]) == 1
    assert "absent.yaml" in capsys.readouterr().err


def test_main_runs_commands_until_eof(tmp_path, capsys, monkeypatch):
    path = tmp_path / "doc.yaml"
    path.write_text("- x\n", encoding="utf-8")
    lines = iter(["bogus", "s", "n"])

    def fake_input(prompt):
        try:
            return next(lines)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr("builtins.input", fake_input)
    assert main([str(path)]) == 0
    err = capsys.readouterr().err
    assert err.count("Current node") == 2
    assert "Reached end of the sequence" in err