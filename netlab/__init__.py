"""Small networking exercises: CRC, bit stuffing, IPv4 classes, sorting and chat over sockets."""

__version__ = "0.1.0"