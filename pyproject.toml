[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tilewar"
version = "0.1.0"
description = "A two-player turn-based strategy game on a tile board, with a small lobby server and chat client"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "strategy", "turn-based", "board", "tiles"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Framework :: AsyncIO",
    "Topic :: Games/Entertainment :: Turn Based Strategy",
]

[project.optional-dependencies]
test = ["pytest", "pytest-asyncio"]

[project.scripts]
tilewar-server = "tilewar.server:main"
tilewar-chat = "tilewar.chat:main"

[tool.hatch.build.targets.wheel]
packages = ["tilewar"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
