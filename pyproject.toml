[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jsonmend"
version = "4.1.0"
description = "JSON Patch (RFC 6902), JSON Merge Patch (RFC 7396) and document diffing for Python documents"
requires-python = ">=3.10"
keywords = ["json", "json-patch", "json-pointer", "merge-patch", "rfc6902", "rfc6901", "rfc7396", "diff"]
classifiers = [
    "Development Status :: 5 - Production/Stable",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["jsonmend"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
