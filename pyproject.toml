[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "koalagraphs"
version = "0.1.0"
description = "Exact and heuristic graph algorithms: vertex coloring, independent and dominating sets, maximum flow"
requires-python = ">=3.10"
keywords = [
    "graph",
    "algorithms",
    "vertex coloring",
    "independent set",
    "dominating set",
    "maximum flow",
    "link-cut tree",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Mathematics",
]
dependencies = [
    "networkx",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["koalagraphs"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
