[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "specforce"
version = "0.2.2"
description = "Spec-Driven Development toolkit: project bootstrapping, the managed AGENTS.md file, terminal rendering and self-upgrade support."
requires-python = ">=3.10"
keywords = [
    "spec-driven-development",
    "sdd",
    "ai-agents",
    "scaffolding",
    "terminal-ui",
    "self-update",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Application Frameworks",
]
dependencies = [
    "requests>=2.28",
    "rich>=13.0",
    "blessed>=1.20",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
    "responses>=0.23",
]

[tool.hatch.build.targets.wheel]
packages = ["specforce"]

[tool.hatch.build.targets.sdist]
include = ["specforce", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP", "SIM"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
ignore_missing_imports = true
