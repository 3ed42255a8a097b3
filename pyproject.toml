[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "aibox"
version = "0.1.0"
description = "Infrastructure asset helpers: TLS certificate probing, expiry tracking and blast-radius trees."
requires-python = ">=3.10"
keywords = ["infrastructure", "assets", "certificates", "tls", "expiry", "blast-radius"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
]
dependencies = [
    "cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["aibox"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
