[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "switchblade"
version = "0.1.0"
description = "Helpers for integration-testing buildpack deployments: source staging, tarball archiving, teardown and output matchers"
requires-python = ">=3.10"
dependencies = []
keywords = ["buildpacks", "integration-testing", "matchers", "tarball", "teardown"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Testing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["switchblade"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
