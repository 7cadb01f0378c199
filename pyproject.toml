[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ubxproto"
version = "0.1.0"
description = "Streaming parser, framing helpers and configuration keys for the u-blox UBX binary GNSS protocol"
requires-python = ">=3.10"
dependencies = []
keywords = ["ubx", "u-blox", "gnss", "gps", "protocol", "parser"]
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
    "Topic :: Scientific/Engineering :: GIS",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ubxproto"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
