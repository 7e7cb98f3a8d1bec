[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pgwire"
version = "0.1.0"
description = "Building blocks for the PostgreSQL frontend/backend wire protocol: message codecs, binary SQL types, results and notification channels"
requires-python = ">=3.10"
dependencies = []
keywords = ["postgresql", "postgres", "wire-protocol", "database", "asyncio"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Framework :: AsyncIO",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["pgwire"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
