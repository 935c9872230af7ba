[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tspsolve"
version = "0.1.0"
description = "Heuristic solvers for the asymmetric travelling salesman problem: greedy, tabu search, simulated annealing and a genetic algorithm"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "tsp",
    "travelling salesman",
    "tabu search",
    "simulated annealing",
    "genetic algorithm",
    "heuristics",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
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

[project.scripts]
tspsolve = "tspsolve.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["tspsolve"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
