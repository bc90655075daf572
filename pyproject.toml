[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "colstore"
version = "0.1.0"
description = "A small in-memory column-store database with CSV loading, relational operators, joins and a minimal SQL SELECT."
requires-python = ">=3.10"
dependencies = []
keywords = ["database", "column-store", "relational", "csv", "join", "sql"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database :: Database Engines/Servers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
colstore = "colstore.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["colstore"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
