[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "awkit"
version = "0.1.0"
description = "Interpreter for a small event query language, with support pieces for an activity-tracking server"
requires-python = ">=3.11"
keywords = [
    "activity",
    "time-tracking",
    "query-language",
    "interpreter",
    "events",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Interpreters",
]
dependencies = [
    "platformdirs",
    "tomli-w",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["awkit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
warn_redundant_casts = true
