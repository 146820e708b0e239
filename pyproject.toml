[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "scscore"
version = "0.1.0"
description = "Revertable storage objects, hash sets, storage deltas and a transaction mempool for a parallel smart-contract engine"
requires-python = ">=3.10"
dependencies = []
keywords = ["smart-contracts", "storage", "delta", "mempool", "hash-set", "revertable"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["scscore"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
