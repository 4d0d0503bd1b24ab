[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "billard"
version = "0.1.0"
description = "Pool table building blocks: BMP reading and writing, texture descriptions, ball meshes, table racks and animated text fields"
requires-python = ">=3.10"
dependencies = []
keywords = ["billiards", "pool", "8-ball", "9-ball", "bmp", "sphere mesh", "game"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Simulation",
    "Topic :: Multimedia :: Graphics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["billard"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
