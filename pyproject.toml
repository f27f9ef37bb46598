[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "maclnr"
version = "0.1.0"
description = "Command-line tool to list large files, clean directories and inspect memory, processes and storage"
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = ["cleanup", "disk", "files", "memory", "processes", "storage", "cli"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: MacOS",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
maclnr = "maclnr.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["maclnr"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
