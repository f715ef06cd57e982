[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "satprop"
version = "0.1.0"
description = "Two-line element parsing and SGP4/SDP4 satellite orbit propagation"
requires-python = ">=3.10"
dependencies = []
keywords = ["satellite", "tle", "sgp4", "sdp4", "orbit", "propagation", "astronomy"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Environment :: Console",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Astronomy",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
satprop = "satprop.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["satprop"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"
