import io
import socket
import sys
import threading

import pytest

from netlab.bitstuff import (
    MAX_BITS,
    client_main,
    decode_ints,
    encode_ints,
    handle_tcp_client,
    handle_udp_request,
    parse_bits,
    request_tcp,
    request_udp,
    stuff_bits,
)

SAMPLES = [
    [0, 1, 1, 1, 1, 1],
    [1, 1, 1, 1, 1, 1, 1],
    [0, 1, 1, 0, 1, 1, 1, 1, 1, 1, 0],
    [0] * 10,
    [0, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 0, 1, 1, 1, 1, 1],
]


def test_stuffs_after_zero_and_five_ones():
    assert stuff_bits([0, 1, 1, 1, 1, 1]) == [0, 1, 1, 1, 1, 1, 0]


def test_counting_stops_after_a_stuffed_zero():
    bits = [0] + [1] * 10
    assert stuff_bits(bits) == [0, 1, 1, 1, 1, 1, 0, 1, 1, 1, 1, 1]


def test_ones_without_leading_zero_are_untouched():
    bits = [1] * 8
    assert stuff_bits(bits) == bits


def test_zero_resets_the_count():
    bits = [0, 1, 1, 0, 1, 1, 1, 1]
    assert stuff_bits(bits) == bits


@pytest.mark.parametrize("bits", SAMPLES)
def test_only_zeros_are_inserted(bits):
    stuffed = stuff_bits(bits)
    assert sum(stuffed) == sum(bits)
    assert len(stuffed) >= len(bits)
    assert stuffed[0] == bits[0]


def test_parse_bits():
    assert parse_bits(["1", "0", "1"]) == [1, 0, 1]


@pytest.mark.parametrize("tokens", [["2"], ["0", "-1"], ["x"]])
def test_parse_bits_rejects_non_bits(tokens):
    with pytest.raises(ValueError):
        parse_bits(tokens)


def test_encode_ints_word_layout():
    assert encode_ints([1]) == (1).to_bytes(4, sys.byteorder)
    assert len(encode_ints([1, 2, 3])) == 12


@pytest.mark.parametrize("values", [[], [0, 1], [200, -5, 7]])
def test_int_round_trip(values):
    assert decode_ints(encode_ints(values)) == values


def test_decode_ints_rejects_partial_word():
    with pytest.raises(ValueError):
        decode_ints(b"\x01\x02\x03")


def test_handle_tcp_client_over_socketpair():
    bits = [0, 1, 1, 1, 1, 1]
    server_side, client_side = socket.socketpair()
    with server_side, client_side:
        client_side.sendall(encode_ints([len(bits), *bits]))
        stuffed = handle_tcp_client(server_side)
        reply = decode_ints(client_side.recv(4 * (len(stuffed) + 1)))
    assert stuffed == stuff_bits(bits)
    assert reply == [len(stuffed), *stuffed]


@pytest.mark.parametrize("length", [0, -3, MAX_BITS + 1])
def test_handle_tcp_client_rejects_bad_length(length):
    server_side, client_side = socket.socketpair()
    with server_side, client_side:
        client_side.sendall(encode_ints([length]))
        with pytest.raises(ValueError, match="Invalid length"):
            handle_tcp_client(server_side)


def test_request_tcp_round_trip():
    bits = [0] + [1] * 10
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(("127.0.0.1", 0))
    listener.listen(1)
    listener.settimeout(5)
    port = listener.getsockname()[1]

    def run():
        conn, _ = listener.accept()
        with conn:
            handle_tcp_client(conn)
        listener.close()

    thread = threading.Thread(target=run, daemon=True)
    thread.start()
    result = request_tcp(bits, "127.0.0.1", port)
    thread.join(5)
    assert result == stuff_bits(bits)


def test_request_udp_round_trip():
    bits = [0, 1, 1, 1, 1, 1, 1, 0]
    server = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    server.bind(("127.0.0.1", 0))
    server.settimeout(5)
    port = server.getsockname()[1]
    served = {}

    def run():
        with server:
            served["bits"] = handle_udp_request(server)

    thread = threading.Thread(target=run, daemon=True)
    thread.start()
    result = request_udp(bits, "127.0.0.1", port)
    thread.join(5)
    assert result == stuff_bits(bits)
    assert served["bits"] == result


def test_handle_udp_request_rejects_bad_length():
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as server, \
            socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as client:
        server.bind(("127.0.0.1", 0))
        server.settimeout(5)
        client.sendto(encode_ints([0]), server.getsockname())
        with pytest.raises(ValueError, match="Invalid length"):
            handle_udp_request(server)


def test_client_main_rejects_non_bits(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("3\n1 0 2\n"))
    assert client_main([]) == 1
    assert "Only 0/1 allowed" in capsys.readouterr().out