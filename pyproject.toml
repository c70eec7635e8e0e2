[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "meshray"
version = "0.1.0"
description = "Mesh geometry toolkit for ray tracing: linear algebra, transforms, BVH construction, ground geometry and viewer settings"
requires-python = ">=3.10"
dependencies = []
keywords = ["mesh", "bvh", "ray tracing", "geometry", "transform", "linear algebra"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["meshray"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
