[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "icetkit"
version = "0.1.0"
description = "Companion tools for the Ice-T terminal: ICET.DAT configuration files, ZMODEM constants, xterm-to-Atari palette tables, an escape-sequence animation demo and a TCP-to-console bridge"
requires-python = ">=3.10"
dependencies = []
keywords = ["atari", "ice-t", "terminal", "vt100", "zmodem", "palette", "escape-sequences"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Terminals",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
icet-palette = "icetkit.palette:main"
icet-animation = "icetkit.animation:main"
tcp2con = "icetkit.tcp2con:main"

[tool.hatch.build.targets.wheel]
packages = ["icetkit"]

[tool.pytest.ini_options]
addopts = "-ra"
