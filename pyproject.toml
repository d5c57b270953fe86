[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "routemin"
version = "0.1.0"
description = "Building blocks for a route-minimisation heuristic for the vehicle routing problem with time windows"
requires-python = ">=3.10"
dependencies = []
keywords = ["vrptw", "vehicle routing", "local search", "heuristic", "xoshiro256"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["routemin"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"
