[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "torchbootstrap"
version = "0.1.19"
description = "Detect the local CUDA version and add the matching PyTorch wheel source to a Poetry project."
requires-python = ">=3.10"
keywords = ["pytorch", "poetry", "cuda", "bootstrap", "cli"]
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
    "Topic :: Software Development :: Build Tools",
]
dependencies = [
    "tomlkit>=0.11",
]

[project.optional-dependencies]
test = [
    "pytest>=7",
]

[project.scripts]
torchbootstrap = "torchbootstrap.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["torchbootstrap"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
