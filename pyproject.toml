[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "derivingvia"
version = "0.1.0"
description = "Newtype deriving for Python dataclasses: borrow behaviour from a wrapped value, directly or through deeper layers."
requires-python = ">=3.10"
dependencies = []
keywords = ["newtype", "deriving", "deriving-via", "wrapper", "dataclass"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["derivingvia"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
