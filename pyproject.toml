[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dinersim"
version = "0.1.0"
description = "A threaded dining philosophers simulation with a starvation watcher"
requires-python = ">=3.10"
dependencies = []
keywords = ["dining philosophers", "concurrency", "threads", "locks", "simulation"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
dinersim = "dinersim.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["dinersim"]

[tool.pytest.ini_options]
addopts = "-ra"
