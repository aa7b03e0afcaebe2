[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "procaud"
version = "0.1.0"
description = "Procedural game sound effects built from small composable DSP graphs"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "audio",
    "dsp",
    "synthesis",
    "procedural",
    "sound-effects",
    "game-audio",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Sound Synthesis",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
procaud = "procaud.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["procaud"]

[tool.hatch.build.targets.sdist]
include = [
    "procaud",
    "tests",
]

[tool.pytest.ini_options]
addopts = "-ra"
