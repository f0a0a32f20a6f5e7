"""CRC codeword computation and a small threaded TCP service that computes it."""

from __future__ import annotations

import argparse
import socket
import sys
import threading

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 9734
MAX_BITS = 100
MAX_CLIENTS = 3


def _check_bits(text: str, what: str) -> None:
    if not text:
        raise ValueError(f"{what} must not be empty")
    if set(text) - {"0", "1"}:
        raise ValueError(f"{what} must contain only 0 and 1")


def compute_crc(bitstream: str, divisor: str) -> str:
    """Return the CRC remainder of *bitstream* for the generator *divisor*."""
    _check_bits(bitstream, "bitstream")
    _check_bits(divisor, "divisor")
    if divisor[0] != "1":
        raise ValueError("divisor must start with 1")

    width = len(divisor) - 1
    poly = [int(bit) for bit in divisor]
    padded = [int(bit) for bit in bitstream] + [0] * width
    for start in range(len(bitstream)):
        if padded[start]:
            window = padded[start:start + len(poly)]
            padded[start:start + len(poly)] = [a ^ b for a, b in zip(window, poly)]
    return "".join(str(bit) for bit in padded[len(bitstream):])


def make_codeword(bitstream: str, divisor: str) -> str:
    """Return the data bits followed by their CRC."""
    return bitstream + compute_crc(bitstream, divisor)


def encode_field(text: str, size: int = MAX_BITS) -> bytes:
    """Encode *text* as a NUL-terminated, NUL-padded field of *size* bytes."""
    raw = text.encode("ascii")
    if b"\0" in raw:
        raise ValueError("field must not contain NUL characters")
    if len(raw) >= size:
        raise ValueError(f"field longer than {size - 1} characters")
    return raw.ljust(size, b"\0")


def decode_field(data: bytes) -> str:
    """Decode a NUL-terminated field, ignoring everything after the terminator."""
    return data.split(b"\0", 1)[0].decode("ascii")


def _recv_exact(sock: socket.socket, size: int) -> bytes:
    chunks = bytearray()
    while len(chunks) < size:
        chunk = sock.recv(size - len(chunks))
        if not chunk:
            raise ConnectionError("connection closed before the full message arrived")
        chunks.extend(chunk)
    return bytes(chunks)


def _recv_until_nul(sock: socket.socket, limit: int) -> bytes:
    chunks = bytearray()
    while len(chunks) < limit and b"\0" not in chunks:
        chunk = sock.recv(limit - len(chunks))
        if not chunk:
            break
        chunks.extend(chunk)
    return bytes(chunks)


def serve_client(conn: socket.socket) -> str:
    """Read a bitstream and divisor from *conn*, reply with the codeword and return it."""
    bitstream = decode_field(_recv_exact(conn, MAX_BITS))
    divisor = decode_field(_recv_exact(conn, MAX_BITS))
    print(f"Received bitstream: {bitstream}")
    print(f"Received divisor: {divisor}")

    crc = compute_crc(bitstream, divisor)
    codeword = bitstream + crc
    print(f"Computed CRC: {crc}")
    print(f"Final codeword: {codeword}")

    conn.sendall(codeword.encode("ascii") + b"\0")
    return codeword


def run_server(host: str = DEFAULT_HOST, port: int = DEFAULT_PORT,
               clients: int = MAX_CLIENTS) -> None:
    """Serve *clients* connections, one per worker thread, then stop."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as server:
        server.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        server.bind((host, port))
        server.listen(clients)
        print(f"CRC Server started. Listening on port {port}...")

        def worker() -> None:
            print("Server waiting for client...")
            conn, _ = server.accept()
            with conn:
                try:
                    serve_client(conn)
                except (ValueError, ConnectionError) as exc:
                    print(f"Client error: {exc}", file=sys.stderr)

        threads = [threading.Thread(target=worker) for _ in range(clients)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()


def request_codeword(bitstream: str, divisor: str, host: str = DEFAULT_HOST,
                     port: int = DEFAULT_PORT) -> str:
    """Ask the server at *host*:*port* for the codeword of *bitstream*."""
    payload = encode_field(bitstream) + encode_field(divisor)
    with socket.create_connection((host, port)) as sock:
        sock.sendall(payload)
        reply = _recv_until_nul(sock, MAX_BITS * 2)
    return decode_field(reply)


def _address_parser(description: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    return parser


def _prompt_token(prompt: str) -> str:
    try:
        words = input(prompt).split()
    except EOFError:
        words = []
    if not words:
        raise ValueError("no input given")
    return words[0]


def server_main(argv: list[str] | None = None) -> int:
    """Start the CRC server."""
    parser = _address_parser("Compute CRC codewords for connecting clients.")
    parser.add_argument("--clients", type=int, default=MAX_CLIENTS)
    args = parser.parse_args(argv)
    try:
        run_server(args.host, args.port, args.clients)
    except OSError as exc:
        print(f"Server error: {exc}", file=sys.stderr)
        return 1
    return 0


def client_main(argv: list[str] | None = None) -> int:
    """Prompt for a bitstream and divisor and print the codeword from the server."""
    args = _address_parser("Request a CRC codeword from the server.").parse_args(argv)
    try:
        bitstream = _prompt_token("Enter bitstream (e.g., 101110): ")
        divisor = _prompt_token("Enter divisor (e.g., 1011): ")
        codeword = request_codeword(bitstream, divisor, args.host, args.port)
    except (ValueError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(f"Received codeword (data + CRC): {codeword}")
    return 0