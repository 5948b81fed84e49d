[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "serikagl"
version = "0.1.0"
description = "Rendering building blocks: low-discrepancy sampling, BRDF math, pixel buffers, PNG I/O, rays, lights and debug primitives"
requires-python = ">=3.10"
keywords = ["rendering", "path-tracing", "sobol", "halton", "hammersley", "brdf", "ray", "png"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
    "Topic :: Scientific/Engineering :: Mathematics",
]
dependencies = [
    "numpy",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["serikagl"]

[tool.pytest.ini_options]
addopts = "-ra"
