[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cddbkit"
version = "0.5.0"
description = "CDDB/freedb disc ids, record parsing and writing, a local record cache, and lookups over CDDBP and HTTP"
requires-python = ">=3.10"
dependencies = []
keywords = ["cddb", "freedb", "cddbp", "cd", "audio", "discid", "metadata"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: CD Audio",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["cddbkit"]

[tool.hatch.build.targets.sdist]
include = ["cddbkit", "tests", "README.md"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
