"""Generate large YAML files, dump and time parsing, compare parser benchmarks and walk documents."""

__version__ = "0.1.0"