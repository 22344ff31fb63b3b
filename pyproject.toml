[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "imgconv"
version = "0.1.0"
description = "Apply square convolution kernels to the RGB channels of RGBA images"
requires-python = ">=3.10"
keywords = ["image", "convolution", "kernel", "filter", "png"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Image Processing",
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
packages = ["imgconv"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
