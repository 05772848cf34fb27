[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hashtab"
version = "0.1.0"
description = "Check files against their hashes: sum file parsing, hash text codecs, settings, update and VirusTotal lookups"
requires-python = ">=3.10"
dependencies = []
keywords = ["hash", "checksum", "sumfile", "sfv", "md5", "sha256", "virustotal"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
hashtab = "hashtab.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["hashtab"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
