[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "geobox"
version = "0.1.0"
description = "Planar geometry types with bounding-box clipping and smart polygon clipping"
requires-python = ">=3.10"
dependencies = []
keywords = ["geometry", "gis", "clipping", "bounding box", "polygon"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: GIS",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["geobox"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
