[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pirelay"
version = "0.1.0"
description = "TCP remote-call server for Raspberry Pi peripherals, with a status web page"
requires-python = ">=3.10"
dependencies = []
keywords = ["raspberry-pi", "gpio", "remote-control", "tcp", "home-automation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Environment :: No Input/Output (Daemon)",
    "Intended Audience :: Developers",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Home Automation",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
pirelay-server = "pirelay.server:main"
pirelay-http = "pirelay.http_server:main"

[tool.hatch.build.targets.wheel]
packages = ["pirelay"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
