[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "routekit"
version = "0.1.0"
description = "Graph routing primitives: Dijkstra and A* search, visibility graphs, priority queues, permutations and nested dissection orders."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "routing",
    "shortest-path",
    "dijkstra",
    "astar",
    "nested-dissection",
    "inertial-flow",
    "visibility-graph",
    "gis",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
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
packages = ["routekit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
