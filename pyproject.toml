[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lpntools"
version = "0.1.0"
description = "Toolchain for a small teaching language: LPN compiler, accumulator-machine executor and Brainfuck utilities"
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "assembly", "emulator", "brainfuck", "education"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Compilers",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
lpn-compile = "lpntools.compiler:main"
lpn-exec = "lpntools.executor:main"
bf-compile = "lpntools.bfcompiler:main"
bf-run = "lpntools.bfinterpreter:main"

[tool.hatch.build.targets.wheel]
packages = ["lpntools"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
