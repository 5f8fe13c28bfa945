[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "darnitkit"
version = "0.2.0"
description = "Game-support utilities: bounding-box lists, collision tests, file views, bzip2 buffers, sound mixing and pixel format reduction"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "collision", "bounding-box", "audio-mixer", "bzip2", "pixel-format"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["darnitkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
