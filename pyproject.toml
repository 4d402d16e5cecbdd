[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "skyburst"
version = "0.1.0"
description = "Firework particle systems with a draw-call recording renderer, plus N-Queens and dependency-cycle solvers"
requires-python = ">=3.10"
dependencies = [
    "numpy",
    "pillow",
    "pygame",
]
keywords = [
    "particles",
    "fireworks",
    "billboards",
    "rendering",
    "n-queens",
    "graph",
    "cycle-detection",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics",
    "Topic :: Games/Entertainment :: Puzzle Games",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
skyburst-demo = "skyburst.demo:main"
skyburst-queens = "skyburst.nqueens:main"
skyburst-cycles = "skyburst.cycles:main"

[tool.hatch.build.targets.wheel]
packages = ["skyburst"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
