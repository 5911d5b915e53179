[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "stubapi"
version = "0.1.0"
description = "Serve stub JSON responses for every operation described in an OpenAPI YAML specification"
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = ["openapi", "stub", "mock", "server", "swagger"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Software Development :: Testing :: Mocking",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
stubapi = "stubapi.server:main"

[tool.hatch.build.targets.wheel]
packages = ["stubapi"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
