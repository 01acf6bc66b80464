[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "flipchess"
version = "0.1.0"
description = "A two-player bitboard chess game where the board flips to the side to move"
requires-python = ">=3.10"
keywords = ["chess", "bitboard", "game", "pygame", "board game"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Board Games",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
flipchess = "flipchess.app:main"

[tool.hatch.build.targets.wheel]
packages = ["flipchess"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
