[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "threadkit"
version = "0.1.0"
description = "Thread-safe containers, thread helpers, a work-stealing thread pool, concurrent quick sorts and message-passing actors"
requires-python = ">=3.10"
dependencies = []
keywords = ["threading", "concurrency", "thread-pool", "queue", "stack", "message-passing"]
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

[project.scripts]
threadkit-atm = "threadkit.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["threadkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
