[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "uwbtdoa"
version = "0.1.0"
description = "Building blocks for simulating UWB TDoA localization and GPS-spoofing detection in a drone swarm"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["uwb", "tdoa", "ekf", "kalman", "drone", "swarm", "localization", "simulation", "gps-spoofing"]
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
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["uwbtdoa"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
