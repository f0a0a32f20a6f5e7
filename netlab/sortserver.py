"""Sort five integers in descending order over a UNIX-domain stream socket."""

from __future__ import annotations

import argparse
import os
import socket
import sys
from collections.abc import Iterable, Iterator

from netlab.bitstuff import decode_ints, encode_ints

DEFAULT_PATH = "server_socket"
COUNT = 5
_WORD = 4


def sort_descending(numbers: Iterable[int]) -> list[int]:
    """Return *numbers* ordered from largest to smallest."""
    return sorted(numbers, reverse=True)


def _recv_exact(sock: socket.socket, size: int) -> bytes:
    chunks = bytearray()
    while len(chunks) < size:
        chunk = sock.recv(size - len(chunks))
        if not chunk:
            raise ConnectionError("connection closed before the full message arrived")
        chunks.extend(chunk)
    return bytes(chunks)


def handle_client(conn: socket.socket) -> list[int]:
    """Read five integers from *conn*, send them back sorted and return them."""
    numbers = decode_ints(_recv_exact(conn, COUNT * _WORD))
    ordered = sort_descending(numbers)
    conn.sendall(encode_ints(ordered))
    return ordered


def serve(path: str = DEFAULT_PATH) -> None:
    """Serve sort requests on the UNIX socket at *path*, forever."""
    try:
        os.unlink(path)
    except FileNotFoundError:
        pass
    with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as server:
        server.bind(path)
        server.listen(5)
        while True:
            print("server waiting")
            try:
                conn, _ = server.accept()
            except OSError as exc:
                print(f"accept: {exc}", file=sys.stderr)
                continue
            with conn:
                try:
                    handle_client(conn)
                except (ValueError, OSError) as exc:
                    print(f"client: {exc}", file=sys.stderr)


def request_sort(numbers: Iterable[int], path: str = DEFAULT_PATH) -> list[int]:
    """Send five integers to the server at *path* and return its sorted reply."""
    numbers = list(numbers)
    if len(numbers) != COUNT:
        raise ValueError(f"exactly {COUNT} numbers are required, got {len(numbers)}")
    with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as sock:
        sock.connect(path)
        sock.sendall(encode_ints(numbers))
        return decode_ints(_recv_exact(sock, COUNT * _WORD))


def _parser(description: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--path", default=DEFAULT_PATH, help="UNIX socket path")
    return parser


def _tokens(stream) -> Iterator[str]:
    for line in iter(stream.readline, ""):
        yield from line.split()


def server_main(argv: list[str] | None = None) -> int:
    """Start the sort server."""
    args = _parser("Sort five integers for connecting clients.").parse_args(argv)
    try:
        serve(args.path)
    except KeyboardInterrupt:
        return 0
    except OSError as exc:
        print(f"Server error: {exc}", file=sys.stderr)
        return 1
    return 0


def client_main(argv: list[str] | None = None) -> int:
    """Read five integers, have the server sort them and print the result."""
    args = _parser("Ask the sort server to order five integers.").parse_args(argv)
    tokens = _tokens(sys.stdin)
    numbers = []
    for _ in range(COUNT):
        print("Enter a number: ", end="", flush=True)
        try:
            numbers.append(int(next(tokens)))
        except (StopIteration, ValueError):
            print("\nError: an integer is required", file=sys.stderr)
            return 1
    try:
        ordered = request_sort(numbers, args.path)
    except (ValueError, OSError) as exc:
        print(f"oops: client1: {exc}", file=sys.stderr)
        return 1
    for number in ordered:
        print(f"Received from server: {number}")
    return 0