[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vibers"
version = "0.1.0"
description = "Product search library: parallel recall and three-stage ranking over a SQLite catalogue"
requires-python = ">=3.10"
keywords = ["search", "recommendation", "ranking", "recall", "sqlite", "ecommerce"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Internet :: WWW/HTTP :: Indexing/Search",
]
dependencies = []

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["vibers"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
