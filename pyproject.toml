[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cryptcore"
version = "0.1.0"
description = "Core pieces of a 2D role-playing engine: vector math, memory arenas, asset types and a dungeon generator"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "roguelike", "dungeon", "maze", "math", "arena", "allocator"]
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
    "Topic :: Games/Entertainment :: Role-Playing",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
cryptcore-dungeon = "cryptcore.generator:main"

[tool.hatch.build.targets.wheel]
packages = ["cryptcore"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
