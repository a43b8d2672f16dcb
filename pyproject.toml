[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mediahub"
version = "0.1.0"
description = "Core services for a living-room media hub: settings, resource paths, key mapping, media streaming and device discovery"
requires-python = ">=3.10"
keywords = ["media", "media-center", "streaming", "keymap", "discovery"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Environment :: No Input/Output (Daemon)",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia",
]
dependencies = [
    "psutil",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
mediahub = "mediahub.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["mediahub"]

[tool.pytest.ini_options]
addopts = "-ra"
