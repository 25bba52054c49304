"""Run several YAML parsers' benchmark commands and compare their times."""

from __future__ import annotations

import subprocess
import sys
import tomllib
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

import yaml

CONFIG_FILE = "bench_compare.toml"


@dataclass(frozen=True)
class ParserConfig:
    """A parser to benchmark and the directory holding its commands."""

    name: str
    path: str


@dataclass(frozen=True)
class Config:
    """Configuration of a comparison run."""

    yaml_input_dir: str
    iterations: int
    parsers: tuple[ParserConfig, ...]
    yaml_output_dir: str
    csv_output: str


@dataclass(frozen=True)
class BenchOutput:
    """The YAML output of one parser's benchmark command."""

    parser: str
    input: str
    average: int
    min: int
    max: int
    percentile95: int
    iterations: int
    times: list[int]


def _require(data: dict[str, Any], key: str, kind: type) -> Any:
    if key not in data:
        raise ValueError(f"missing field `{key}`")
    value = data[key]
    if kind is int:
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ValueError(f"field `{key}` must be a non-negative integer")
    elif not isinstance(value, kind):
        raise ValueError(f"field `{key}` must be of type {kind.__name__}")
    return value


def load_config(path: str | Path) -> Config:
    """Read the comparison configuration from a TOML file."""
    with open(path, "rb") as handle:
        data = tomllib.load(handle)
    parsers = tuple(
        ParserConfig(name=_require(entry, "name", str), path=_require(entry, "path", str))
        for entry in _require(data, "parsers", list)
    )
    return Config(
        yaml_input_dir=_require(data, "yaml_input_dir", str),
        iterations=_require(data, "iterations", int),
        parsers=parsers,
        yaml_output_dir=_require(data, "yaml_output_dir", str),
        csv_output=_require(data, "csv_output", str),
    )


def _parse_bench_output(text: str) -> BenchOutput:
    data = yaml.safe_load(text)
    if not isinstance(data, dict):
        raise ValueError("expected a mapping")
    times = _require(data, "times", list)
    for value in times:
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ValueError("field `times` must hold non-negative integers")
    return BenchOutput(
        parser=_require(data, "parser", str),
        input=_require(data, "input", str),
        average=_require(data, "average", int),
        min=_require(data, "min", int),
        max=_require(data, "max", int),
        percentile95=_require(data, "percentile95", int),
        iterations=_require(data, "iterations", int),
        times=list(times),
    )


def list_input_files(config: Config) -> list[str]:
    """Return the paths of the `.yaml` files in the input directory, sorted."""
    return sorted(
        str(entry)
        for entry in Path(config.yaml_input_dir).iterdir()
        if entry.suffix.lower() == ".yaml"
    )


def run_bench(config: Config) -> list[list[int]]:
    """Run every parser's `run_bench` on every input and save the results.

    Returns the average times, one row per input and one column per parser;
    a run that failed counts as 0.
    """
    output_dir = Path(config.yaml_output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    inputs = list_input_files(config)
    iterations = str(config.iterations)
    averages: list[list[int]] = []

    for input_path in inputs:
        basename = Path(input_path).name
        input_times: list[int] = []
        for parser in config.parsers:
            print(f"Running {basename} against {parser.name}")
            command = Path(parser.path) / "run_bench"
            try:
                completed = subprocess.run(
                    [str(command), input_path, iterations, "--output-yaml"],
                    capture_output=True,
                    check=False,
                )
            except OSError as exc:
                raise RuntimeError(f"While running {command} against {input_path}: {exc}") from exc

            if completed.returncode != 0:
                print("Errored: process did exit non-zero")
                input_times.append(0)
                continue

            stdout = completed.stdout.decode("utf-8", errors="replace")
            try:
                output = _parse_bench_output(stdout)
            except (ValueError, yaml.YAMLError) as exc:
                print(f"Errored: Invalid YAML output: {exc}")
                input_times.append(0)
                continue

            input_times.append(output.average)
            saved = output_dir / f"{parser.name}-{basename}"
            with saved.open("w", encoding="utf-8") as handle:
                yaml.safe_dump(asdict(output), handle, sort_keys=False)
        averages.append(input_times)

    save_run_bench_csv(config, inputs, averages)
    return averages


def save_run_bench_csv(config: Config, inputs: list[str], averages: list[list[int]]) -> None:
    """Write a CSV of averages: one column per parser, one row per input file."""
    with open(config.csv_output, "w", encoding="utf-8", newline="\n") as csv:
        csv.write("".join(f",{parser.name}" for parser in config.parsers) + "\n")
        for path, row in zip(inputs, averages):
            csv.write(Path(path).name + "".join(f",{avg}" for avg in row) + "\n")


def main(argv: list[str] | None = None) -> int:
    """Compare parsers as configured in `bench_compare.toml`."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        config = load_config(CONFIG_FILE)
    except (OSError, ValueError) as exc:
        print(f"{CONFIG_FILE}: {exc}", file=sys.stderr)
        return 1

    if not config.parsers:
        print("Please add at least one parser. Refer to the README for instructions.")
        return 0
    if len(args) != 1 or args[0] not in ("time_parse", "run_bench"):
        print("Usage: bench_compare <time_parse|run_bench>")
        return 0

    if args[0] == "time_parse":
        print("`time_parse` mode is not implemented yet", file=sys.stderr)
        return 1
    try:
        run_bench(config)
    except (OSError, RuntimeError) as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())