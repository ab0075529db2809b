[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sectorfs"
version = "0.1.0"
description = "A small flat file system stored in fixed-size sectors of a simulated disk"
requires-python = ">=3.10"
dependencies = []
keywords = ["filesystem", "disk", "sectors", "bitmap", "inode", "hash table", "teaching"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Filesystems",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sectorfs"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
