"""Parsing of YAML text into spanned events, and a dump command."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

import yaml

_STYLES = {
    None: "Plain",
    "": "Plain",
    "'": "SingleQuoted",
    '"': "DoubleQuoted",
    "|": "Literal",
    ">": "Folded",
}


@dataclass(frozen=True)
class Marker:
    """A position in the input: character index, 1-based line and 0-based column."""

    index: int
    line: int
    col: int

    @classmethod
    def from_mark(cls, mark: yaml.Mark | None) -> Marker:
        """Build a marker from a YAML library mark; a missing mark is the start."""
        if mark is None:
            return cls(0, 1, 0)
        return cls(mark.index, mark.line + 1, mark.column)


@dataclass(frozen=True)
class Span:
    """The region of the input an event was read from."""

    start: Marker
    end: Marker

    def __len__(self) -> int:
        return self.end.index - self.start.index

    @property
    def is_empty(self) -> bool:
        """Whether the span covers no characters."""
        return self.start.index == self.end.index


class ParseError(Exception):
    """Raised when the input is not valid YAML."""

    def __init__(self, info: str, marker: Marker) -> None:
        super().__init__(info, marker)
        self.info = info
        self.marker = marker

    def __str__(self) -> str:
        m = self.marker
        return f"{self.info} at char {m.index} line {m.line} column {m.col}"


def _iter_events(text: str) -> Iterator[tuple[yaml.Event, Span]]:
    try:
        for event in yaml.parse(text, Loader=yaml.SafeLoader):
            span = Span(Marker.from_mark(event.start_mark), Marker.from_mark(event.end_mark))
            yield event, span
    except yaml.MarkedYAMLError as exc:
        mark = exc.problem_mark or exc.context_mark
        info = exc.problem or exc.context or str(exc)
        raise ParseError(info, Marker.from_mark(mark)) from exc
    except yaml.YAMLError as exc:
        raise ParseError(str(exc), Marker(0, 1, 0)) from exc


def parse_events(text: str) -> list[tuple[yaml.Event, Span]]:
    """Parse `text` and return every event with its span."""
    return list(_iter_events(text))


def _anchor(anchor: str | None) -> str:
    return "None" if anchor is None else f"&{anchor}"


def _tag(tag: str | None) -> str:
    return "None" if tag is None else repr(tag)


def format_event(event: yaml.Event) -> str:
    """Return a one-line description of an event."""
    match event:
        case yaml.StreamStartEvent():
            return "StreamStart"
        case yaml.StreamEndEvent():
            return "StreamEnd"
        case yaml.DocumentStartEvent():
            return f"DocumentStart({'true' if event.explicit else 'false'})"
        case yaml.DocumentEndEvent():
            return "DocumentEnd"
        case yaml.SequenceStartEvent():
            return f"SequenceStart({_anchor(event.anchor)}, {_tag(event.tag)})"
        case yaml.SequenceEndEvent():
            return "SequenceEnd"
        case yaml.MappingStartEvent():
            return f"MappingStart({_anchor(event.anchor)}, {_tag(event.tag)})"
        case yaml.MappingEndEvent():
            return "MappingEnd"
        case yaml.ScalarEvent():
            style = _STYLES.get(event.style, "Plain")
            return (
                f"Scalar({event.value!r}, {style}, "
                f"{_anchor(event.anchor)}, {_tag(event.tag)})"
            )
        case yaml.AliasEvent():
            return f"Alias(*{event.anchor})"
        case _:
            return "Nothing"


def main(argv: list[str] | None = None) -> int:
    """Print the events of a YAML file to standard error."""
    parser = argparse.ArgumentParser(prog="dump-events", description="Dump YAML parser events.")
    parser.add_argument("path")
    args = parser.parse_args(argv)

    try:
        text = Path(args.path).read_text(encoding="utf-8")
    except OSError as exc:
        print(f"{args.path}: {exc}", file=sys.stderr)
        return 1

    try:
        for event, _span in _iter_events(text):
            print(f"      \x1b[;34m\u21b3 {format_event(event)}\x1b[;m", file=sys.stderr)
    except ParseError as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())