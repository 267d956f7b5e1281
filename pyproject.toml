[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kaori"
version = "0.1.0"
description = "Lexer, parser and name resolver for the Kaori language, with a small bytecode virtual machine"
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "language", "lexer", "parser", "resolver", "bytecode", "virtual-machine"]
classifiers = [
    "Development Status :: 2 - Pre-Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Compilers",
    "Topic :: Software Development :: Interpreters",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["kaori"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
