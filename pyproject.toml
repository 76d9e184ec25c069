[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "minios"
version = "1.0.0"
description = "Kernel data structures, an ELF boot loader model, a small command shell and a terminal snake game"
requires-python = ">=3.10"
dependencies = []
keywords = ["kernel", "bitmap", "linked list", "red-black tree", "elf", "shell", "snake"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Operating System",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
minios-shell = "minios.shell:main"
minios-snake = "minios.snake:main"

[tool.hatch.build.targets.wheel]
packages = ["minios"]

[tool.pytest.ini_options]
addopts = "-ra"
