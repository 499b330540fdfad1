[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "plotmon"
version = "0.1.0"
description = "Terminal plot monitor that follows metrics logged to a JSONL file"
requires-python = ">=3.10"
keywords = ["jsonl", "metrics", "monitoring", "plot", "terminal", "curses"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console :: Curses",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Visualization",
]
dependencies = [
    "watchdog",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
pm = "plotmon.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["plotmon"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
