[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hodlhunt"
version = "0.1.0"
description = "Simulation of an ocean where fish grow by feeding, hunt each other and hold shares of a common pool"
requires-python = ">=3.10"
dependencies = [
    "pycryptodome",
]
keywords = ["game", "simulation", "shares", "pool", "hunting"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Simulation",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["hodlhunt"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
