[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "termprofile"
version = "0.1.0"
description = "Terminal emulator profiles: typed properties, colour palettes, settings storage and scrollbar container state"
requires-python = ">=3.10"
keywords = ["terminal", "profile", "palette", "settings", "colors", "font"]
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
    "Topic :: Terminals :: Terminal Emulators/X Terminals",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["termprofile"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
