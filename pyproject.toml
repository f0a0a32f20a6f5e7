[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "netlab"
version = "0.1.0"
description = "Small networking exercises: CRC and bit-stuffing servers, IPv4 classful details, a sort server and chat programs"
requires-python = ">=3.10"
dependencies = []
keywords = ["networking", "crc", "bit-stuffing", "sockets", "chat", "ipv4"]
classifiers = [
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: POSIX",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Topic :: System :: Networking",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
netlab-crc-server = "netlab.crc:server_main"
netlab-crc-client = "netlab.crc:client_main"
netlab-bitstuff-server = "netlab.bitstuff:server_main"
netlab-bitstuff-client = "netlab.bitstuff:client_main"
netlab-ipclass = "netlab.ipclass:main"
netlab-sort-server = "netlab.sortserver:server_main"
netlab-sort-client = "netlab.sortserver:client_main"
netlab-udpchat-server = "netlab.udpchat:server_main"
netlab-udpchat-client = "netlab.udpchat:client_main"
netlab-tcpchat-server = "netlab.tcpchat:server_main"
netlab-tcpchat-client = "netlab.tcpchat:client_main"

[tool.setuptools.packages.find]
include = ["netlab*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
