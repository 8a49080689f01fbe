[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "zelkova"
version = "0.2.0"
description = "Markdown note vault tools: configuration, keymaps, vault watching, a command palette model and daemon control"
requires-python = ">=3.11"
keywords = ["notes", "markdown", "vault", "keymap", "command-palette", "cli"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: News/Diary",
]
dependencies = [
    "platformdirs",
    "tomli-w",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
zelkova = "zelkova.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["zelkova"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.11"
strict = true
