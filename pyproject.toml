[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "accfgutil"
version = "0.1.0"
description = "Support utilities for accelerator configuration tools: option parsing, command dispatch, size parsing, bitmaps, sysfs access, logging and JSON formatting"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "accelerator",
    "sysfs",
    "command-line",
    "option-parsing",
    "bitmap",
    "configuration",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
    "Topic :: System :: Hardware",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["accfgutil"]

[tool.hatch.build.targets.sdist]
include = ["accfgutil", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
