"""Bit stuffing over TCP and UDP, with integers exchanged as native 4-byte words."""

from __future__ import annotations

import argparse
import itertools
import socket
import struct
import sys
from collections.abc import Iterable, Iterator

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 9734
MAX_BITS = 200

_INT = struct.Struct("=i")


def stuff_bits(bits: Iterable[int]) -> list[int]:
    """Insert a 0 after five 1s that follow a 0.

    Counting starts only after a 0 has been seen and stops after each
    inserted 0 until the next 0 in the input.
    """
    stuffed: list[int] = []
    tracking = False
    ones = 0
    for bit in bits:
        stuffed.append(bit)
        if tracking:
            if bit == 1:
                ones += 1
                if ones == 5:
                    stuffed.append(0)
                    tracking = False
                    ones = 0
            else:
                tracking = bit == 0
                ones = 0
        elif bit == 0:
            tracking = True
            ones = 0
    return stuffed


def parse_bits(tokens: Iterable[str]) -> list[int]:
    """Convert text tokens to bits, rejecting anything but 0 and 1."""
    bits = []
    for token in tokens:
        value = int(token)
        if value not in (0, 1):
            raise ValueError("Only 0/1 allowed")
        bits.append(value)
    return bits


def encode_ints(values: Iterable[int]) -> bytes:
    """Pack integers as consecutive native-order 4-byte words."""
    return b"".join(_INT.pack(value) for value in values)


def decode_ints(data: bytes) -> list[int]:
    """Unpack consecutive native-order 4-byte words."""
    if len(data) % _INT.size:
        raise ValueError(f"data length {len(data)} is not a multiple of {_INT.size}")
    return [value for (value,) in _INT.iter_unpack(data)]


def _check_length(length: int) -> None:
    if length <= 0 or length > MAX_BITS:
        raise ValueError(f"Invalid length: {length}")


def _recv_exact(sock: socket.socket, size: int) -> bytes:
    chunks = bytearray()
    while len(chunks) < size:
        chunk = sock.recv(size - len(chunks))
        if not chunk:
            raise ConnectionError("connection closed before the full message arrived")
        chunks.extend(chunk)
    return bytes(chunks)


def _report(original: int, stuffed: int) -> None:
    print(f"Processed {original} → {stuffed} bits")


def handle_tcp_client(conn: socket.socket) -> list[int]:
    """Read a length-prefixed bit stream from *conn*, reply with it stuffed."""
    (length,) = _INT.unpack(_recv_exact(conn, _INT.size))
    _check_length(length)
    bits = decode_ints(_recv_exact(conn, _INT.size * length))
    stuffed = stuff_bits(bits)
    conn.sendall(encode_ints([len(stuffed), *stuffed]))
    _report(len(bits), len(stuffed))
    return stuffed


def serve_tcp(host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> None:
    """Serve TCP clients one after another, forever."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as server:
        server.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        server.bind((host, port))
        server.listen(5)
        print("Server ready")
        while True:
            print("\n Server Waiting")
            try:
                conn, _ = server.accept()
            except OSError as exc:
                print(f"Accept error: {exc}", file=sys.stderr)
                continue
            with conn:
                try:
                    handle_tcp_client(conn)
                except (ValueError, OSError) as exc:
                    print(exc, file=sys.stderr)


def request_tcp(bits: Iterable[int], host: str = DEFAULT_HOST,
                port: int = DEFAULT_PORT) -> list[int]:
    """Send *bits* to the TCP server and return the stuffed stream."""
    bits = list(bits)
    with socket.create_connection((host, port)) as sock:
        sock.sendall(encode_ints([len(bits), *bits]))
        (count,) = _INT.unpack(_recv_exact(sock, _INT.size))
        if count < 0:
            raise ValueError(f"Invalid length: {count}")
        return decode_ints(_recv_exact(sock, _INT.size * count))


def _recv_int(sock: socket.socket) -> tuple[int, tuple]:
    data, address = sock.recvfrom(_INT.size)
    if len(data) != _INT.size:
        raise ValueError(f"short datagram of {len(data)} bytes")
    (value,) = _INT.unpack(data)
    return value, address


def handle_udp_request(sock: socket.socket) -> list[int]:
    """Receive one length-prefixed bit stream as datagrams and reply with it stuffed."""
    length, address = _recv_int(sock)
    _check_length(length)
    bits = []
    for _ in range(length):
        value, address = _recv_int(sock)
        bits.append(value)
    stuffed = stuff_bits(bits)
    for value in (len(stuffed), *stuffed):
        sock.sendto(_INT.pack(value), address)
    _report(len(bits), len(stuffed))
    return stuffed


def serve_udp(host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> None:
    """Serve UDP requests forever."""
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.bind((host, port))
        print("UDP Server ready")
        while True:
            print("\nServer Waiting")
            try:
                handle_udp_request(sock)
            except (ValueError, OSError) as exc:
                print(exc, file=sys.stderr)


def request_udp(bits: Iterable[int], host: str = DEFAULT_HOST,
                port: int = DEFAULT_PORT) -> list[int]:
    """Send *bits* to the UDP server and return the stuffed stream."""
    bits = list(bits)
    server = (host, port)
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        for value in (len(bits), *bits):
            sock.sendto(_INT.pack(value), server)
        count, _ = _recv_int(sock)
        return [_recv_int(sock)[0] for _ in range(count)]


def _parser(description: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--udp", action="store_true", help="use UDP instead of TCP")
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    return parser


def _tokens(stream) -> Iterator[str]:
    for line in iter(stream.readline, ""):
        yield from line.split()


def server_main(argv: list[str] | None = None) -> int:
    """Start the bit-stuffing server."""
    args = _parser("Bit-stuffing server.").parse_args(argv)
    serve = serve_udp if args.udp else serve_tcp
    try:
        serve(args.host, args.port)
    except KeyboardInterrupt:
        return 0
    except OSError as exc:
        print(f"Server error: {exc}", file=sys.stderr)
        return 1
    return 0


def client_main(argv: list[str] | None = None) -> int:
    """Read a bit stream from standard input and print the stuffed result."""
    args = _parser("Bit-stuffing client.").parse_args(argv)
    tokens = _tokens(sys.stdin)
    print("Enter number of bits: ", end="", flush=True)
    try:
        count = int(next(tokens, ""))
    except ValueError:
        print("Error: a number of bits is required")
        return 1
    if count <= 0 or count > MAX_BITS:
        print(f"Error: number of bits must be between 1 and {MAX_BITS}")
        return 1
    print(f"Enter binary stream ({count} bits):")
    try:
        bits = parse_bits(itertools.islice(tokens, count))
    except ValueError:
        print("Error: Only 0/1 allowed")
        return 1
    if len(bits) < count:
        print(f"Error: expected {count} bits, got {len(bits)}")
        return 1

    request = request_udp if args.udp else request_tcp
    try:
        stuffed = request(bits, args.host, args.port)
    except (ValueError, OSError) as exc:
        print(f"Connect error: {exc}", file=sys.stderr)
        return 1
    print(f"\nStuffed stream ({len(stuffed)} bits):")
    print(" ".join(str(bit) for bit in stuffed))
    return 0