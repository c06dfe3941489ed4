[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rigidsim"
version = "0.1.0"
description = "Articulated rigid-body dynamics with spatial vector algebra, fixed-step ODE solvers and grid terrain contact"
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = [
    "rigid body",
    "dynamics",
    "spatial vector algebra",
    "articulated body",
    "simulation",
    "terrain",
    "runge-kutta",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
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
rigidsim-demo = "rigidsim.demos:main"

[tool.hatch.build.targets.wheel]
packages = ["rigidsim"]

[tool.pytest.ini_options]
addopts = "-ra"
