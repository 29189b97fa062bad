[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lichsurvivor"
version = "0.1.0"
description = "A top-down arcade survival shooter: hold off waves of enemies, level up with buffs and defeat the Lich."
requires-python = ">=3.10"
keywords = ["game", "arcade", "shooter", "survivor", "pygame"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Arcade",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
lichsurvivor = "lichsurvivor.main:main"

[tool.hatch.build.targets.wheel]
packages = ["lichsurvivor"]

[tool.pytest.ini_options]
addopts = "-ra"
