import socket
import threading

import pytest

from netlab.crc import (
    MAX_BITS,
    compute_crc,
    decode_field,
    encode_field,
    make_codeword,
    request_codeword,
    serve_client,
)

CASES = [
    ("101110", "1011"),
    ("11010011101100", "1011"),
    ("1", "11"),
    ("100100", "1101"),
    ("111111111", "10011"),
]


def test_worked_example():
    assert compute_crc("11010011101100", "1011") == "100"


@pytest.mark.parametrize("bitstream,divisor", CASES)
def test_codeword_is_divisible_by_divisor(bitstream, divisor):
    codeword = make_codeword(bitstream, divisor)
    assert compute_crc(codeword, divisor) == "0" * (len(divisor) - 1)


@pytest.mark.parametrize("bitstream,divisor", CASES)
def test_crc_width(bitstream, divisor):
    assert len(compute_crc(bitstream, divisor)) == len(divisor) - 1


@pytest.mark.parametrize("bitstream,divisor", CASES)
def test_codeword_keeps_data(bitstream, divisor):
    codeword = make_codeword(bitstream, divisor)
    assert codeword[: len(bitstream)] == bitstream
    assert codeword[len(bitstream):] == compute_crc(bitstream, divisor)


def test_zero_data_gives_zero_crc():
    assert set(compute_crc("000000", "1011")) == {"0"}


@pytest.mark.parametrize(
    "bitstream,divisor",
    [("101", "0110"), ("102", "1011"), ("", "1011"), ("101", ""), ("101", "1a1")],
)
def test_invalid_input_raises(bitstream, divisor):
    with pytest.raises(ValueError):
        compute_crc(bitstream, divisor)


def test_encode_field_round_trip():
    field = encode_field("101110")
    assert len(field) == MAX_BITS
    assert decode_field(field) == "101110"


def test_encode_field_too_long():
    with pytest.raises(ValueError):
        encode_field("1" * MAX_BITS)


def test_decode_field_stops_at_nul():
    assert decode_field(b"101\0garbage") == "101"


def test_serve_client_over_socketpair(capsys):
    server_side, client_side = socket.socketpair()
    with server_side, client_side:
        client_side.sendall(encode_field("101110") + encode_field("1011"))
        codeword = serve_client(server_side)
        reply = client_side.recv(MAX_BITS * 2)
    assert codeword == make_codeword("101110", "1011")
    assert reply == codeword.encode("ascii") + b"\0"
    assert "Final codeword: " + codeword in capsys.readouterr().out


def test_request_codeword_against_server():
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(("127.0.0.1", 0))
    listener.listen(1)
    listener.settimeout(5)
    port = listener.getsockname()[1]
    served = {}

    def run():
        conn, _ = listener.accept()
        with conn:
            served["codeword"] = serve_client(conn)
        listener.close()

    thread = threading.Thread(target=run, daemon=True)
    thread.start()
    result = request_codeword("11010011101100", "1011", "127.0.0.1", port)
    thread.join(5)
    assert result == make_codeword("11010011101100", "1011")
    assert served["codeword"] == result