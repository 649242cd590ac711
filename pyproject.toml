[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "shasper"
version = "0.1.0"
description = "Casper FFG justification and finalization, rewards, RANDAO and committee shuffling for a beacon-style chain"
requires-python = ">=3.10"
dependencies = []
keywords = ["casper", "ffg", "randao", "consensus", "beacon-chain", "proof-of-stake", "committee", "shuffling"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Distributed Computing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["shasper"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
