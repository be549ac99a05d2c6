[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "agarcore"
version = "0.1.0"
description = "A headless Agar.io-style game engine for simulation and continual-learning experiments"
requires-python = ">=3.10"
dependencies = []
keywords = ["agario", "game", "simulation", "reinforcement-learning", "engine"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
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
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["agarcore"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
