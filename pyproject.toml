[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "breathe"
version = "0.1.0"
description = "Air-quality station toolkit: SHT3x, DHT12 and QMP6988 environmental sensors over I2C, common sensor types, CSV logging and screen text helpers."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "air quality",
    "sht3x",
    "dht12",
    "qmp6988",
    "barometer",
    "altitude",
    "humidity",
    "temperature",
    "i2c",
    "sensor",
    "csv",
    "logging",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Atmospheric Science",
    "Topic :: System :: Hardware",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["breathe"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
