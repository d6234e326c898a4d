[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rvsim"
version = "0.1.0"
description = "Cycle-level building blocks for an out-of-order RV32I processor simulator"
requires-python = ">=3.10"
dependencies = []
keywords = ["risc-v", "rv32i", "simulator", "tomasulo", "out-of-order", "cpu"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: System :: Emulators",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rvsim"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
