[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kitaevgap"
version = "0.1.0"
description = "Spectral gap of long-range two-dimensional Kitaev lattice Hamiltonians over a phase-space grid"
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = ["kitaev", "topological superconductor", "spectral gap", "jacobi eigenvalue", "long-range hopping"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Environment :: Console",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
kitaevgap = "kitaevgap.kitaev:main"

[tool.hatch.build.targets.wheel]
packages = ["kitaevgap"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
