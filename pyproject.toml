[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rivetdb"
version = "0.1.0"
description = "Catalog, configuration and type mapping core for a cached query engine over remote databases"
requires-python = ">=3.11"
dependencies = [
    "pyyaml",
]
keywords = [
    "catalog",
    "sqlite",
    "postgres",
    "duckdb",
    "arrow",
    "schema",
    "metadata",
    "configuration",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["rivetdb"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
warn_redundant_casts = true
