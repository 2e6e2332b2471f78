[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "eurosim"
version = "0.1.0"
description = "Sample-by-sample models of a resonant OTA ladder filter, a three-channel attenuverter mixer and Eurorack front-panel hardware"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["eurorack", "synthesizer", "filter", "dsp", "audio", "modular"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Sound Synthesis",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["eurosim"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
