"""Interactive navigation of a YAML document through the spans of its nodes."""

from __future__ import annotations

import argparse
import enum
import sys
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from yamlbench.events import Marker, ParseError, Span, format_event

USAGE = "Usage: walk <file.yaml>"
CLEAR_SCREEN = "\x1b[2J\x1b[H"


class WalkError(Exception):
    """Raised when a document cannot be loaded or a move is not possible."""


class NodeKind(enum.Enum):
    """The kind of a node in the walked document."""

    SCALAR = "scalar"
    SEQUENCE = "sequence"
    MAPPING = "mapping"


@dataclass(eq=False)
class WalkNode:
    """A node of the document with the span it covers in the input."""

    span: Span
    kind: NodeKind = NodeKind.SCALAR
    items: list[WalkNode] = field(default_factory=list)
    pairs: list[tuple[WalkNode, WalkNode]] = field(default_factory=list)


class Action(enum.Enum):
    """A command of the navigation prompt."""

    STEP_IN = "step_in"
    STEP_IN_KEY = "step_in_key"
    STEP_IN_VALUE = "step_in_value"
    NEXT = "next"
    PREV = "prev"
    FIN = "fin"
    STOP = "stop"


_COMMANDS = {
    "q": Action.STOP,
    "quit": Action.STOP,
    "n": Action.NEXT,
    "next": Action.NEXT,
    "p": Action.PREV,
    "prev": Action.PREV,
    "s": Action.STEP_IN,
    "si": Action.STEP_IN,
    "i": Action.STEP_IN,
    "sk": Action.STEP_IN_KEY,
    "sv": Action.STEP_IN_VALUE,
    "fin": Action.FIN,
    "out": Action.FIN,
    "up": Action.FIN,
}


def parse_action(line: str) -> Action | None:
    """Return the action a prompt line asks for, or None if it is not a command."""
    return _COMMANDS.get(line)


def _events(contents: str) -> Iterator[tuple[yaml.Event, Span]]:
    try:
        for event in yaml.parse(contents, Loader=yaml.SafeLoader):
            span = Span(Marker.from_mark(event.start_mark), Marker.from_mark(event.end_mark))
            yield event, span
    except yaml.MarkedYAMLError as exc:
        mark = exc.problem_mark or exc.context_mark
        info = exc.problem or exc.context or str(exc)
        raise WalkError(str(ParseError(info, Marker.from_mark(mark)))) from exc
    except yaml.YAMLError as exc:
        raise WalkError(str(exc)) from exc


def _span_from_bounds(start: Span, end: Span) -> Span:
    return Span(start.start, end.end)


@dataclass(eq=False)
class _Frame:
    node: WalkNode
    start: Span
    key: WalkNode | None = None


def _build_node(
    event: yaml.Event, span: Span, events: Iterator[tuple[yaml.Event, Span]]
) -> WalkNode:
    """Build the node starting with `event`, reading its contents from `events`."""
    frames: list[_Frame] = []

    while True:
        built: WalkNode | None = None
        top = frames[-1] if frames else None

        if top is not None and top.node.kind is NodeKind.MAPPING and top.key is not None:
            if isinstance(event, (yaml.MappingEndEvent, yaml.DocumentEndEvent, yaml.StreamEndEvent)):
                raise WalkError("Mapping key was not followed by a value")

        if top is not None and isinstance(event, (yaml.DocumentEndEvent, yaml.StreamEndEvent)):
            if top.node.kind is NodeKind.SEQUENCE:
                raise WalkError("Sequence ended before SequenceEnd was emitted")
            raise WalkError("Mapping ended before MappingEnd was emitted")

        if isinstance(event, (yaml.ScalarEvent, yaml.AliasEvent)):
            built = WalkNode(span=span)
        elif isinstance(event, yaml.SequenceStartEvent):
            frames.append(_Frame(WalkNode(span=span, kind=NodeKind.SEQUENCE), span))
        elif isinstance(event, yaml.MappingStartEvent):
            frames.append(_Frame(WalkNode(span=span, kind=NodeKind.MAPPING), span))
        elif isinstance(event, yaml.SequenceEndEvent) and top and top.node.kind is NodeKind.SEQUENCE:
            frames.pop()
            top.node.span = _span_from_bounds(top.start, span)
            built = top.node
        elif isinstance(event, yaml.MappingEndEvent) and top and top.node.kind is NodeKind.MAPPING:
            frames.pop()
            top.node.span = _span_from_bounds(top.start, span)
            built = top.node
        else:
            raise WalkError(f"Unexpected event while building node: {format_event(event)}")

        if built is not None:
            if not frames:
                return built
            parent = frames[-1]
            if parent.node.kind is NodeKind.SEQUENCE:
                parent.node.items.append(built)
            elif parent.key is None:
                parent.key = built
            else:
                parent.node.pairs.append((parent.key, built))
                parent.key = None

        try:
            event, span = next(events)
        except StopIteration:
            raise WalkError("Unexpected end of parser event stream") from None


def _load_document_node(
    events: Iterator[tuple[yaml.Event, Span]], document_span: Span
) -> WalkNode:
    for event, span in events:
        if isinstance(event, (yaml.DocumentEndEvent, yaml.StreamEndEvent)):
            return WalkNode(span=Span(document_span.end, document_span.end))
        if isinstance(event, (yaml.StreamStartEvent, yaml.DocumentStartEvent)):
            continue
        return _build_node(event, span, events)
    raise WalkError("Document ended before a node was emitted")


def load_first_document(contents: str) -> WalkNode:
    """Build the node tree of the first document in `contents`."""
    events = _events(contents)
    for event, span in events:
        if isinstance(event, yaml.StreamStartEvent):
            continue
        if isinstance(event, yaml.DocumentStartEvent):
            return _load_document_node(events, span)
        if isinstance(event, yaml.StreamEndEvent):
            break
        return _build_node(event, span, events)
    raise WalkError("No YAML document found")


def char_to_byte_index(contents: str, char_index: int) -> int:
    """Return the UTF-8 byte offset of the character at `char_index`.

    An index past the end maps to the byte length of `contents`.
    """
    if char_index >= len(contents):
        return len(contents.encode("utf-8"))
    return len(contents[:char_index].encode("utf-8"))


def source_range(contents: str, span: Span) -> range:
    """Return the UTF-8 byte range of `contents` that `span` covers."""
    return range(
        char_to_byte_index(contents, span.start.index),
        char_to_byte_index(contents, span.end.index),
    )


class Walker:
    """A cursor moving through a node tree, keeping the path from the root."""

    def __init__(self, root: WalkNode) -> None:
        self._stack = [root]

    def current(self) -> WalkNode:
        """Return the node the cursor is on."""
        return self._stack[-1]

    def step_in(self) -> None:
        """Enter the first item of a sequence or the first value of a mapping."""
        node = self.current()
        if node.kind is NodeKind.SEQUENCE:
            if not node.items:
                raise WalkError("Sequence is empty")
            self._stack.append(node.items[0])
        elif node.kind is NodeKind.MAPPING:
            self._enter_pair(node, key=False)
        else:
            raise WalkError("Not in a mapping or a sequence")

    def step_in_key(self) -> None:
        """Enter the first key of a mapping."""
        node = self.current()
        if node.kind is not NodeKind.MAPPING:
            raise WalkError("Not in a mapping")
        self._enter_pair(node, key=True)

    def step_in_value(self) -> None:
        """Enter the first value of a mapping."""
        node = self.current()
        if node.kind is not NodeKind.MAPPING:
            raise WalkError("Not in a mapping")
        self._enter_pair(node, key=False)

    def _enter_pair(self, node: WalkNode, key: bool) -> None:
        if not node.pairs:
            raise WalkError("Mapping is empty")
        first_key, first_value = node.pairs[0]
        self._stack.append(first_key if key else first_value)

    def _position(self) -> tuple[WalkNode, int, bool]:
        """Return the parent, the index in it and whether the node is a key."""
        node, parent = self._stack[-1], self._stack[-2]
        if parent.kind is NodeKind.SEQUENCE:
            for index, sibling in enumerate(parent.items):
                if sibling is node:
                    return parent, index, False
        else:
            for index, (key, value) in enumerate(parent.pairs):
                if key is node:
                    return parent, index, True
                if value is node:
                    return parent, index, False
        raise LookupError("node is not a child of its parent")

    def _sibling(self, parent: WalkNode, index: int, is_key: bool) -> WalkNode:
        if parent.kind is NodeKind.SEQUENCE:
            return parent.items[index]
        key, value = parent.pairs[index]
        return key if is_key else value

    def next(self) -> None:
        """Move to the next item of the enclosing collection."""
        if len(self._stack) == 1:
            raise WalkError("Can't next from top-level")
        parent, index, is_key = self._position()
        index += 1
        if parent.kind is NodeKind.SEQUENCE and index == len(parent.items):
            raise WalkError("Reached end of the sequence")
        if parent.kind is NodeKind.MAPPING and index == len(parent.pairs):
            raise WalkError("Reached end of the map")
        self._stack[-1] = self._sibling(parent, index, is_key)

    def prev(self) -> None:
        """Move to the previous item of the enclosing collection."""
        if len(self._stack) == 1:
            raise WalkError("Can't prev from top-level")
        parent, index, is_key = self._position()
        if index == 0:
            raise WalkError("Already at the beginning of the collection")
        self._stack[-1] = self._sibling(parent, index - 1, is_key)

    def fin(self) -> None:
        """Move back to the enclosing collection."""
        if len(self._stack) <= 1:
            raise WalkError("Already at the top-level")
        self._stack.pop()

    def apply(self, action: Action) -> None:
        """Perform a navigation action."""
        moves: dict[Action, Callable[[], None]] = {
            Action.STEP_IN: self.step_in,
            Action.STEP_IN_KEY: self.step_in_key,
            Action.STEP_IN_VALUE: self.step_in_value,
            Action.NEXT: self.next,
            Action.PREV: self.prev,
            Action.FIN: self.fin,
        }
        if action not in moves:
            raise ValueError(f"{action.name} is not a navigation action")
        moves[action]()


def render(contents: str, node: WalkNode) -> str:
    """Return the source lines covered by `node` with its span underlined."""
    lines = contents.split("\n")
    start, end = node.span.start, node.span.end
    first, last, end_col = start.line, end.line, end.col
    if last > first and end_col == 0:
        last -= 1
        end_col = len(lines[last - 1]) if last - 1 < len(lines) else 0

    width = len(str(last))
    out = ["<input>"]
    for number in range(first, last + 1):
        line = lines[number - 1] if number - 1 < len(lines) else ""
        lo = start.col if number == first else 0
        hi = end_col if number == last else len(line)
        label = " Current node" if number == last else ""
        out.append(f"{number:>{width}} \u2502 {line}")
        out.append(f"{'':>{width}} \u2502 {' ' * lo}{'^' * max(hi - lo, 1)}{label}")
    return "\n".join(out)


def _read_action(read: Callable[[str], str]) -> Action:
    while True:
        try:
            line = read(">> ")
        except (EOFError, KeyboardInterrupt):
            return Action.STOP
        action = parse_action(line)
        if action is not None:
            return action


def _repl(contents: str, root: WalkNode, read: Callable[[str], str] = input) -> None:
    walker = Walker(root)
    print(render(contents, root), file=sys.stderr)
    while True:
        action = _read_action(read)
        if action is Action.STOP:
            return
        try:
            walker.apply(action)
        except WalkError as exc:
            print(exc, file=sys.stderr)
            continue
        sys.stdout.write(CLEAR_SCREEN)
        sys.stdout.flush()
        print(render(contents, walker.current()), file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    """Navigate the first document of a YAML file interactively."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        print(USAGE, file=sys.stderr)
        return 0
    parser = argparse.ArgumentParser(prog="walk")
    parser.add_argument("path")
    path = parser.parse_args(args).path

    try:
        contents = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        print(f"{path}: {exc}", file=sys.stderr)
        return 1
    try:
        root = load_first_document(contents)
    except WalkError as exc:
        print(exc, file=sys.stderr)
        return 1

    _repl(contents, root)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())