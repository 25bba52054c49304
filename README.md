# yamlbench

A small toolbox for measuring YAML parsing:

- generate large, reproducible YAML files to benchmark against;
- parse a file and print its event stream;
- time repeated parses of a file and report average, minimum, maximum
  and 95th percentile;
- run several parser benchmark commands side by side and collect their
  averages into a CSV file;
- walk through a YAML document node by node, with the current node
  marked in the source.

Parsing is done with PyYAML's event parser (`yaml.parse` with
`SafeLoader`).

## Installation

```
pip install .
```

The test suite needs the `test` extra:

```
pip install ".[test]"
pytest
```

## Generating benchmark inputs

```
yamlbench-gen
yamlbench-gen --output-dir some/dir
```

Writes four files into `bench_yaml/` in the current directory (or into
the directory given with `--output-dir`), creating it if needed:

| File                 | Content                                              |
|----------------------|------------------------------------------------------|
| `big.yaml`           | 100,000 records with literal text, authors, URLs     |
| `nested.yaml`        | one deeply nested mapping of 1,100,000 nodes         |
| `small_objects.yaml` | 4,000,000 small name/e-mail objects                  |
| `strings_array.yaml` | 1,300,000 one-line lorem ipsum strings               |

The random generators are seeded with a fixed value, so every run
produces the same files. The building blocks are available from Python
too:

- `yamlbench.textgen`: `hex_string`, `email` (addresses at example.com),
  `url`, `integer`, `alnum_string`, `string_from_set`, `name`,
  `full_name`, `lipsum_words`, `words`, `paragraph` and `text`, each
  taking a `random.Random` as first argument;
- `yamlbench.nested`: `Tree`, `Node`, `id_for_number` and
  `create_deep_object(writer, n_nodes)`;
- `yamlbench.generator.Generator`: `gen_record_array`,
  `gen_authors_array`, `gen_strings_array` and the lower-level
  `gen_array`, `gen_object`, `write_lines`, `nl`, `push_indent` and
  `pop_indent`, all writing to a text stream.

## Dumping events

```
yamlbench-dump-events document.yaml
```

Parses the whole file, all documents included, and prints every event to
standard error as it is received, in the form given by
`yamlbench.events.format_event`. A file that cannot be read or parsed
prints an error and exits with status 1. From Python,
`yamlbench.events.parse_events(text)` returns each event with its `Span`
(start and end `Marker` with character index, 1-based line and 0-based
column) and raises `ParseError` on invalid input.

## Timing a parse

```
yamlbench-time-parse document.yaml
yamlbench-time-parse document.yaml --short
```

Parses the file once. The default output states the size in MiB and the
elapsed time; `--short` prints only the elapsed time in nanoseconds.

```
yamlbench-run-bench document.yaml 100
yamlbench-run-bench document.yaml 100 --output-yaml
```

Parses the file three times to warm up, then the given number of times
(which must be greater than zero), and reports the average, minimum,
maximum and 95th percentile in seconds. With `--output-yaml` the report
is a YAML mapping with `parser` (`yamlbench`), `input`, `average`, `min`,
`max`, `percentile95`, `iterations` and the list of `times`, all in
nanoseconds. Errors in the arguments or in the input are printed to
standard error and the command exits with status 1.

The same is available from `yamlbench.timing`: `do_parse`, `summarize`,
`run_bench(path, iterations)` returning a `BenchResult` with `to_yaml()`
and `to_human()`, and `BenchError` for failures.

## Comparing parsers

`yamlbench-compare` reads `bench_compare.toml` from the current directory:

```toml
yaml_input_dir = "bench_yaml"
iterations = 10
yaml_output_dir = "bench_output"
csv_output = "bench_output/averages.csv"

[[parsers]]
name = "first"
path = "/opt/parsers/first/bin"

[[parsers]]
name = "second"
path = "/opt/parsers/second/bin"
```

Each parser's `path` is a directory holding an executable named
`run_bench` that takes `<input-file> <iterations> --output-yaml` and
prints a report in the same form as `yamlbench-run-bench --output-yaml`.
Then:

```
yamlbench-compare run_bench
```

runs every `.yaml` file of `yaml_input_dir` (in sorted order) against
every parser, saves each report as
`<yaml_output_dir>/<parser name>-<input file name>`, and writes a CSV
with one column per parser and one row per input holding the average
times. A parser that exits non-zero or prints an invalid report gets an
average of 0. If no parsers are configured, or the mode is missing or
unknown, a message is printed and nothing is run. The `time_parse` mode
is recognised but reports that it is not implemented and exits with
status 1.

## Walking a document

```
yamlbench-walk document.yaml
```

Loads the first document of the file and prints its source lines with
the current node underlined. Commands at the `>>` prompt:

| Command               | Effect                                           |
|-----------------------|--------------------------------------------------|
| `s`, `si`, `i`        | step into a sequence, or a mapping's first value |
| `sk`                  | step into a mapping's first key                  |
| `sv`                  | step into a mapping's first value                |
| `n`, `next`           | move to the next sibling                         |
| `p`, `prev`           | move to the previous sibling                     |
| `fin`, `out`, `up`    | go back to the parent                            |
| `q`, `quit`           | leave (end of input or Ctrl-C also leaves)       |

Other input is ignored. Inside a mapping, `next` and `prev` keep to keys
or to values, whichever the current node is. Moves that are not possible
print a message and leave the position unchanged. From Python,
`yamlbench.walk.load_first_document` builds a `WalkNode` tree and
`Walker` moves through it, raising `WalkError` for impossible moves.

## What it does not do

- Only PyYAML is timed by `yamlbench-run-bench` and `yamlbench-time-parse`;
  the package ships no other parsers.
- `yamlbench-compare` only runs executables named `run_bench` found in
  the configured directories; it does not install or build them, and its
  `time_parse` mode is not available.