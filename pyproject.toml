[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "threetris"
version = "3.0.0"
description = "A falling-block puzzle game with pieces of at most three cells, plus hold, next preview, ghost piece and levels"
requires-python = ">=3.10"
dependencies = ["pygame"]
keywords = ["game", "puzzle", "falling blocks", "triomino", "pygame"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: MacOS X",
    "Environment :: Win32 (MS Windows)",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Puzzle Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
threetris = "threetris.app:main"

[tool.hatch.build.targets.wheel]
packages = ["threetris"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
