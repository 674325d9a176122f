[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tracetcp"
version = "1.0.3"
description = "Building blocks for TCP route tracing: option parsing, IPv4 addresses, packet headers, raw sockets and trace reports"
requires-python = ">=3.10"
dependencies = []
keywords = ["traceroute", "tcp", "network", "diagnostics", "packets", "icmp", "arp", "checksum"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking :: Monitoring",
    "Topic :: Internet",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["tracetcp"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
