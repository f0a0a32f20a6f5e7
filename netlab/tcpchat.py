"""Full-duplex line chat between a TCP server and a single client."""

from __future__ import annotations

import argparse
import socket
import sys
import threading
from collections.abc import Callable

DEFAULT_HOST = "127.0.0.1"
PORT = 8760
BUFFER_SIZE = 1024


def relay_incoming(sock: socket.socket, write: Callable[[str], object],
                   remote_label: str, local_label: str) -> None:
    """Show everything the peer sends until it disconnects."""
    while True:
        try:
            data = sock.recv(BUFFER_SIZE - 1)
        except OSError:
            data = b""
        if not data:
            write(f"\n{remote_label} disconnected.\n")
            return
        text = data.decode("utf-8", errors="replace")
        write(f"\r{remote_label}: {text}{local_label}: ")


def chat_loop(sock: socket.socket, read_line: Callable[[], str],
              write: Callable[[str], object], local_label: str = "Client",
              remote_label: str = "Server") -> bool:
    """Send typed lines while showing incoming ones.

    Returns True when the peer disconnected and False when local input ended.
    """
    lock = threading.Lock()
    finished = threading.Event()
    local_done = threading.Event()
    remote_closed = threading.Event()

    def locked_write(text: str) -> None:
        with lock:
            if not local_done.is_set():
                write(text)

    def receive() -> None:
        relay_incoming(sock, locked_write, remote_label, local_label)
        remote_closed.set()
        finished.set()

    def send() -> None:
        try:
            while not finished.is_set():
                locked_write(f"{local_label}: ")
                line = read_line()
                if not line:
                    break
                with lock:
                    sock.sendall(line.encode("utf-8"))
        except OSError:
            pass
        if not remote_closed.is_set():
            local_done.set()
        finished.set()

    threading.Thread(target=receive, daemon=True).start()
    threading.Thread(target=send, daemon=True).start()
    finished.wait()
    return remote_closed.is_set()


def _stdout_write(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


def _parser(description: str, host: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--host", default=host)
    parser.add_argument("--port", type=int, default=PORT)
    return parser


def server_main(argv: list[str] | None = None) -> int:
    """Wait for one client and chat with it."""
    args = _parser("TCP chat server.", "").parse_args(argv)
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as server:
            server.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            server.bind((args.host, args.port))
            server.listen(1)
            print("Chatroom Ready!\nWaiting for client...")
            conn, _ = server.accept()
            with conn:
                print("Client Connected!")
                chat_loop(conn, sys.stdin.readline, _stdout_write, "Server", "Client")
    except KeyboardInterrupt:
        return 0
    except OSError as exc:
        print(f"Server error: {exc}", file=sys.stderr)
        return 1
    return 0


def client_main(argv: list[str] | None = None) -> int:
    """Connect to the chat server and chat with it."""
    args = _parser("TCP chat client.", DEFAULT_HOST).parse_args(argv)
    try:
        with socket.create_connection((args.host, args.port)) as sock:
            print("Connected to server!")
            chat_loop(sock, sys.stdin.readline, _stdout_write, "Client", "Server")
    except KeyboardInterrupt:
        return 0
    except OSError as exc:
        print(f"Connection failed: {exc}", file=sys.stderr)
        return 1
    return 0