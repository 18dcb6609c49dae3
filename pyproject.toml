[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cursorkit"
version = "0.1.0"
description = "Read and write Windows static (.cur) and animated (.ani) cursor files"
requires-python = ">=3.10"
dependencies = [
    "pillow",
]
keywords = ["cursor", "cur", "ani", "riff", "icon", "animated cursor"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
cursorkit = "cursorkit.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["cursorkit"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
