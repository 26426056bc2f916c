[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "actwallet"
version = "0.1.0"
description = "Wallet client logic for an ACT blockchain node: RPC command descriptions, a worker pool, token history and transfer checks"
requires-python = ">=3.10"
dependencies = []
keywords = ["wallet", "blockchain", "rpc", "act", "transfer", "token"]
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
    "Topic :: Office/Business :: Financial",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["actwallet"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
