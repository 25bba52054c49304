[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "yamlbench"
version = "0.1.0"
description = "Tools for generating large YAML inputs, timing YAML parsing, comparing parsers and walking documents by span"
requires-python = ">=3.11"
dependencies = [
    "pyyaml",
]
keywords = ["yaml", "benchmark", "parser", "spans", "test-data"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Benchmark",
    "Topic :: Text Processing :: Markup",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
yamlbench-gen = "yamlbench.generator:main"
yamlbench-dump-events = "yamlbench.events:main"
yamlbench-run-bench = "yamlbench.timing:bench_main"
yamlbench-time-parse = "yamlbench.timing:time_parse_main"
yamlbench-compare = "yamlbench.compare:main"
yamlbench-walk = "yamlbench.walk:main"

[tool.hatch.build.targets.wheel]
packages = ["yamlbench"]

[tool.hatch.build.targets.sdist]
include = ["yamlbench", "tests", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
