[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tinysh"
version = "0.1.0"
description = "A small interactive shell with history, background jobs, prompt changes and /proc file viewing"
requires-python = ">=3.10"
dependencies = []
keywords = ["shell", "command-line", "jobs", "history", "repl"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Shells",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tinysh = "tinysh.shell:main"

[tool.hatch.build.targets.wheel]
packages = ["tinysh"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
