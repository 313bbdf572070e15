[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ackgen"
version = "0.4.0"
description = "Building blocks for generating Kubernetes controller code for AWS service APIs"
requires-python = ">=3.10"
keywords = ["kubernetes", "aws", "controller", "code-generation", "crd"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Code Generators",
]
dependencies = [
    "pyyaml",
    "jinja2",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["ackgen"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
