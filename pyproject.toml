[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vxn"
version = "0.0.4"
description = "Controller, parameter tables, tempo sync and preset plumbing for a two-layer polyphonic synthesizer."
requires-python = ">=3.10"
dependencies = []
keywords = ["synthesizer", "audio", "parameters", "presets", "controller", "tempo-sync"]
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
    "Topic :: Multimedia :: Sound/Audio :: Sound Synthesis",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["vxn"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
