[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "yourvm"
version = "0.1.0"
description = "A small 16-bit virtual machine with an assembler, a memory bus and RAM"
requires-python = ">=3.10"
dependencies = []
keywords = ["virtual machine", "emulator", "assembler", "cpu", "16-bit"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Emulators",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
yourvm = "yourvm.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["yourvm"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
