"""Generator of large YAML benchmark files."""

from __future__ import annotations

import argparse
import random
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import TextIO

from yamlbench import nested, textgen

OUTPUT_DIR = "bench_yaml"

FieldWriter = Callable[["Generator", TextIO], None]


class Generator:
    """Writes YAML documents of random records, tracking indentation."""

    def __init__(self, seed: int = 42) -> None:
        self.rng = random.Random(seed)
        self._indents = [0]

    @property
    def indent(self) -> int:
        """The current indentation."""
        return self._indents[-1]

    def push_indent(self, offset: int) -> None:
        """Push a new indentation relative to the current one."""
        self._indents.append(self.indent + offset)

    def pop_indent(self) -> None:
        """Pop the last indentation; the base indentation cannot be popped."""
        if len(self._indents) <= 1:
            raise IndexError("cannot pop the base indentation")
        self._indents.pop()

    def nl(self, writer: TextIO) -> None:
        """Write a line break followed by the current indentation."""
        writer.write("\n" + " " * self.indent)

    def write_lines(self, writer: TextIO, lines: Iterable[str]) -> None:
        """Write lines at the current indentation."""
        for index, line in enumerate(lines):
            if index:
                self.nl(writer)
            writer.write(line)

    def gen_array(
        self,
        writer: TextIO,
        len_lo: int,
        len_hi: int,
        obj_creator: FieldWriter,
    ) -> None:
        """Write a block sequence whose items are produced by `obj_creator`."""
        for index in range(self.rng.randrange(len_lo, len_hi)):
            if index:
                self.nl(writer)
            writer.write("- ")
            self.push_indent(2)
            obj_creator(self, writer)
            self.pop_indent()

    def gen_object(self, writer: TextIO, fields: Iterable[tuple[str, FieldWriter]]) -> None:
        """Write a block mapping whose values are produced by the given writers."""
        for index, (key, write_value) in enumerate(fields):
            if index:
                self.nl(writer)
            writer.write(f"{key}: ")
            write_value(self, writer)

    def gen_record_array(self, writer: TextIO, items_lo: int, items_hi: int) -> None:
        """Write a sequence of records."""
        self.gen_array(writer, items_lo, items_hi, Generator.gen_record_object)

    def gen_strings_array(
        self,
        writer: TextIO,
        items_lo: int,
        items_hi: int,
        words_lo: int,
        words_hi: int,
    ) -> None:
        """Write a sequence of lorem-ipsum one-liners."""
        self.gen_array(
            writer,
            items_lo,
            items_hi,
            lambda gen, w: w.write(textgen.words(gen.rng, words_lo, words_hi)),
        )

    def gen_record_object(self, writer: TextIO) -> None:
        """Write a record with description, authors, hash, version, home, repository and pdf."""
        self.gen_object(
            writer,
            [
                ("description", _write_description),
                ("authors", _write_authors),
                ("hash", lambda gen, w: w.write(textgen.hex_string(gen.rng, 64))),
                ("version", lambda gen, w: w.write(str(textgen.integer(gen.rng, 1, 9)))),
                ("home", lambda gen, w: w.write(textgen.url(gen.rng, "https", 0, 1, 0, 0, None))),
                (
                    "repository",
                    lambda gen, w: w.write(textgen.url(gen.rng, "git", 1, 4, 10, 20, None)),
                ),
                (
                    "pdf",
                    lambda gen, w: w.write(textgen.url(gen.rng, "https", 1, 4, 10, 30, "pdf")),
                ),
            ],
        )

    def gen_authors_array(self, writer: TextIO, items_lo: int, items_hi: int) -> None:
        """Write a sequence of authors."""
        self.gen_array(writer, items_lo, items_hi, Generator.gen_author_object)

    def gen_author_object(self, writer: TextIO) -> None:
        """Write a small mapping with a name and an e-mail address."""
        self.gen_object(
            writer,
            [
                ("name", lambda gen, w: w.write(textgen.full_name(gen.rng, 10, 15))),
                ("email", lambda gen, w: w.write(textgen.email(gen.rng, 1, 9))),
            ],
        )


def _write_description(gen: Generator, writer: TextIO) -> None:
    writer.write("|")
    gen.push_indent(2)
    gen.nl(writer)
    lines = textgen.text(gen.rng, 1, 9, 3, 8, 10, 20, 80 - gen.indent)
    gen.write_lines(writer, lines)
    gen.pop_indent()


def _write_authors(gen: Generator, writer: TextIO) -> None:
    gen.push_indent(2)
    gen.nl(writer)
    gen.gen_authors_array(writer, 1, 10)
    gen.pop_indent()


def _open(path: Path) -> TextIO:
    return path.open("w", encoding="utf-8", newline="\n")


def main(argv: list[str] | None = None) -> int:
    """Generate the benchmark YAML files."""
    parser = argparse.ArgumentParser(description="Generate large YAML files for benchmarks.")
    parser.add_argument("--output-dir", default=OUTPUT_DIR)
    args = parser.parse_args(argv)

    output = Path(args.output_dir)
    output.mkdir(parents=True, exist_ok=True)
    generator = Generator()

    print("Generating big.yaml")
    with _open(output / "big.yaml") as out:
        generator.gen_record_array(out, 100_000, 100_001)

    print("Generating nested.yaml")
    with _open(output / "nested.yaml") as out:
        nested.create_deep_object(out, 1_100_000)

    print("Generating small_objects.yaml")
    with _open(output / "small_objects.yaml") as out:
        generator.gen_authors_array(out, 4_000_000, 4_000_001)

    print("Generating strings_array.yaml")
    with _open(output / "strings_array.yaml") as out:
        generator.gen_strings_array(out, 1_300_000, 1_300_001, 10, 40)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())