[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dtattr"
version = "0.1.0"
description = "In-memory device trees with typed platform attributes, attribute databases and text rendering"
requires-python = ">=3.10"
dependencies = []
keywords = ["device tree", "attributes", "firmware", "cronus", "infodb"]
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
    "Topic :: Software Development :: Embedded Systems",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["dtattr"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
