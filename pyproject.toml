[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jubreton"
version = "0.1.0"
description = "A small NumPy neural network for binary classification of grayscale images"
requires-python = ">=3.10"
keywords = ["neural-network", "image-classification", "binary-cross-entropy", "swish", "numpy"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Image Recognition",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]
dependencies = [
    "numpy",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
jubreton = "jubreton.training:main"

[tool.hatch.build.targets.wheel]
packages = ["jubreton"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
