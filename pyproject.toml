[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "scalka"
version = "1.0.0"
description = "Scientific keypad calculator with infix expressions, trigonometric and hyperbolic functions"
requires-python = ">=3.10"
keywords = ["calculator", "scientific", "expression", "keypad", "operator-precedence"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
scalka = "scalka.app:main"

[tool.hatch.build.targets.wheel]
packages = ["scalka"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
