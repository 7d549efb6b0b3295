[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "exprcompiler"
version = "1.0.0"
description = "A small compiler that turns a simple statement language into x86-64 NASM assembly"
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "assembly", "nasm", "shunting-yard", "lexer", "x86-64"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
exprcompiler = "exprcompiler.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["exprcompiler"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
