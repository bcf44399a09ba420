[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "farc3"
version = "0.1.0"
description = "Arc-consistency solving for constraint satisfaction problems"
requires-python = ">=3.10"
dependencies = []
keywords = ["csp", "constraint-satisfaction", "arc-consistency", "minesweeper", "solver"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["farc3"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
