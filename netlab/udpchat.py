"""Turn-based chat between a UDP server and a single client."""

from __future__ import annotations

import argparse
import socket
import sys
from collections.abc import Callable

DEFAULT_HOST = "127.0.0.1"
PORT = 12345
BUFFER_SIZE = 1024


def receive_message(sock: socket.socket) -> tuple[str, tuple]:
    """Receive one datagram and return its text and the sender's address."""
    data, address = sock.recvfrom(BUFFER_SIZE)
    return data.decode("utf-8", errors="replace"), address


def server_loop(sock: socket.socket, read_line: Callable[[], str],
                write: Callable[[str], object]) -> None:
    """Alternate between showing a client message and sending a typed reply.

    Stops when *read_line* reports end of input with an empty string.
    """
    while True:
        message, address = receive_message(sock)
        write(f"Client: {message}\n")
        write("You: ")
        line = read_line()
        if not line:
            return
        sock.sendto(line.encode("utf-8"), address)


def client_loop(sock: socket.socket, address: tuple, read_line: Callable[[], str],
                write: Callable[[str], object]) -> None:
    """Alternate between sending a typed line to *address* and showing the reply.

    Stops when *read_line* reports end of input with an empty string.
    """
    while True:
        write("You: ")
        line = read_line()
        if not line:
            return
        sock.sendto(line.encode("utf-8"), address)
        message, address = receive_message(sock)
        write(f"Server: {message}\n")


def _stdout_write(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


def _parser(description: str, host: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--host", default=host)
    parser.add_argument("--port", type=int, default=PORT)
    return parser


def server_main(argv: list[str] | None = None) -> int:
    """Start the UDP chat server."""
    args = _parser("UDP chat server.", "").parse_args(argv)
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.bind((args.host, args.port))
            print("UDP Server started. Waiting for messages...")
            server_loop(sock, sys.stdin.readline, _stdout_write)
    except KeyboardInterrupt:
        return 0
    except OSError as exc:
        print(f"Server error: {exc}", file=sys.stderr)
        return 1
    return 0


def client_main(argv: list[str] | None = None) -> int:
    """Start the UDP chat client."""
    args = _parser("UDP chat client.", DEFAULT_HOST).parse_args(argv)
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            client_loop(sock, (args.host, args.port), sys.stdin.readline, _stdout_write)
    except KeyboardInterrupt:
        return 0
    except OSError as exc:
        print(f"Client error: {exc}", file=sys.stderr)
        return 1
    return 0