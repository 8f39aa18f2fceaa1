[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "voxstream"
version = "0.1.0"
description = "UDP ingestion of drone voxel streams with bulk binary COPY into PostgreSQL"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "voxel",
    "morton",
    "z-order",
    "udp",
    "drone",
    "postgresql",
    "copy",
    "ingestion",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet",
    "Topic :: Database",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["voxstream"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
files = ["voxstream"]
