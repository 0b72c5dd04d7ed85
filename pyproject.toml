[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "zeitgeist"
version = "0.1.0"
description = "A small SQL database engine with an interactive shell"
requires-python = ">=3.10"
dependencies = []
keywords = ["database", "sql", "lexer", "parser", "shell", "thread-pool"]
classifiers = [
    "Development Status :: 2 - Pre-Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
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
zeitgeist = "zeitgeist.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["zeitgeist"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"
