[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fedit"
version = "1.0.0"
description = "A simple terminal text editor"
requires-python = ">=3.10"
keywords = ["editor", "text", "terminal", "tui"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Environment :: Console :: Curses",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Editors",
]
dependencies = [
    "blessed",
    "regex",
    "wcwidth",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
fedit = "fedit.app:main"

[tool.hatch.build.targets.wheel]
packages = ["fedit"]

[tool.pytest.ini_options]
addopts = "-ra"
