[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pitchtester"
version = "1.0.0"
description = "Test and compare pitch detection algorithms (YIN and FFT) on bass guitar signals"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "pitch detection",
    "yin",
    "fft",
    "bass guitar",
    "audio analysis",
    "tuner",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Analysis",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
pitchtester = "pitchtester.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["pitchtester"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
