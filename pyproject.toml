[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "xgedit"
version = "0.9.0"
description = "Editing tools for Yamaha XG synthesizer parameters: RPN/NRPN decoding, SysEx session files, user voice presets, settings and session state."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "midi",
    "xg",
    "sysex",
    "rpn",
    "nrpn",
    "qs300",
    "synthesizer",
    "editor",
]
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
    "Topic :: Multimedia :: Sound/Audio :: MIDI",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["xgedit"]

[tool.hatch.build.targets.sdist]
include = ["xgedit", "tests", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
