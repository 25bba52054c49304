"""Timing of YAML parsing over a file."""

from __future__ import annotations

import sys
import time
from dataclasses import dataclass, replace
from decimal import Decimal
from pathlib import Path

from yamlbench.events import ParseError, parse_events

WARMUP_RUNS = 3
BENCH_USAGE = "Usage: run-bench <input-file> <iterations> [--output-yaml]"


class BenchError(Exception):
    """Raised when a benchmark cannot be run."""


def _decimal_text(value: int, scale: int) -> str:
    return format(Decimal(value) / Decimal(scale), "f")


def _format_duration(ns: int) -> str:
    for unit, scale in (("s", 10**9), ("ms", 10**6), ("\u00b5s", 10**3)):
        if ns >= scale:
            return f"{_decimal_text(ns, scale)}{unit}"
    return f"{ns}ns"


def do_parse(text: str) -> int:
    """Parse `text` and return the elapsed time in nanoseconds."""
    begin = time.perf_counter_ns()
    try:
        parse_events(text)
    except ParseError as exc:
        raise BenchError(f"failed to parse YAML input: {exc}") from exc
    return time.perf_counter_ns() - begin


@dataclass(frozen=True)
class BenchResult:
    """Parsing times of one input and the metrics derived from them."""

    times: tuple[int, ...]
    input: str = ""

    @property
    def iterations(self) -> int:
        return len(self.times)

    @property
    def average(self) -> int:
        return sum(self.times) // len(self.times)

    @property
    def min(self) -> int:
        return min(self.times)

    @property
    def max(self) -> int:
        return max(self.times)

    @property
    def percentile95(self) -> int:
        ordered = sorted(self.times)
        return ordered[(95 * len(ordered)) // 100]

    def to_yaml(self, parser_name: str = "yamlbench") -> str:
        """Return the result as a YAML document."""
        lines = [
            f"parser: {parser_name}",
            f"input: {self.input}",
            f"average: {self.average}",
            f"min: {self.min}",
            f"max: {self.max}",
            f"percentile95: {self.percentile95}",
            f"iterations: {self.iterations}",
            "times:",
            *(f"  - {t}" for t in self.times),
        ]
        return "\n".join(lines)

    def to_human(self) -> str:
        """Return the metrics in seconds, one per line."""
        return "\n".join(
            [
                f"Average: {_decimal_text(self.average, 10**9)}s",
                f"Min: {_decimal_text(self.min, 10**9)}s",
                f"Max: {_decimal_text(self.max, 10**9)}s",
                f"95%: {_decimal_text(self.percentile95, 10**9)}s",
            ]
        )


def summarize(times) -> BenchResult:
    """Return the metrics of the given parsing times."""
    times = tuple(times)
    if not times:
        raise BenchError("iterations must be greater than zero")
    return BenchResult(times=times)


def _read(path: str | Path) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise BenchError(f"failed to read '{path}': {exc}") from exc


def run_bench(path: str | Path, iterations: int) -> BenchResult:
    """Parse the file a few times to warm up, then `iterations` times measured."""
    if iterations <= 0:
        raise BenchError("iterations must be greater than zero")
    text = _read(path)
    for _ in range(WARMUP_RUNS):
        do_parse(text)
    times = [do_parse(text) for _ in range(iterations)]
    return replace(summarize(times), input=str(path))


def bench_main(argv: list[str] | None = None) -> int:
    """Benchmark parsing of a file and print the metrics."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        if not 2 <= len(args) <= 3:
            raise BenchError(f"{BENCH_USAGE}\ninvalid arguments")
        path, raw_iterations = args[0], args[1]
        try:
            iterations = int(raw_iterations)
            if iterations < 0:
                raise ValueError("number must not be negative")
        except ValueError as exc:
            raise BenchError(f"invalid iterations '{raw_iterations}': {exc}") from exc
        if iterations == 0:
            raise BenchError("iterations must be greater than zero")
        output_yaml = len(args) == 3 and args[2] == "--output-yaml"
        if len(args) == 3 and not output_yaml:
            raise BenchError(
                f"{BENCH_USAGE}\nunknown option '{args[2]}'; expected --output-yaml"
            )
        result = run_bench(path, iterations)
    except BenchError as exc:
        print(exc, file=sys.stderr)
        return 1

    print(result.to_yaml() if output_yaml else result.to_human())
    return 0


def time_parse_main(argv: list[str] | None = None) -> int:
    """Time a single parse of a file."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print("Usage: time-parse <input-file> [--short]", file=sys.stderr)
        return 1
    try:
        text = _read(args[0])
        elapsed = do_parse(text)
    except BenchError as exc:
        print(exc, file=sys.stderr)
        return 1

    if len(args) == 2 and args[1] == "--short":
        print(elapsed)
    else:
        size = len(text.encode("utf-8")) // 1024 // 1024
        print(f"Loaded {size}MiB in {_format_duration(elapsed)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(bench_main())