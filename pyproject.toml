[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "awcc"
version = "0.1.0"
description = "Keyboard lighting and fan mode control for Dell G Series laptops"
requires-python = ">=3.10"
dependencies = []
keywords = ["dell", "alienware", "keyboard", "rgb", "fan", "acpi", "hidraw"]
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
    "Topic :: System :: Hardware",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
awcc = "awcc.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["awcc"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
