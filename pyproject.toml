[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "p2proute"
version = "0.1.0"
description = "K-shortest-path road routing and a peer-to-peer parking availability cache for vehicular simulations"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "routing",
    "shortest-path",
    "dijkstra",
    "yen",
    "k-shortest-paths",
    "vehicular-networks",
    "parking",
    "cache",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["p2proute"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
