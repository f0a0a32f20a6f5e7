# netlab

This package holds a set of small network programs for learning. Each one is a
terminal command, and most of them come as a server and client pair. The
package needs only the Python standard library.

## Installing

    pip install .

To run the tests:

    pip install ".[test]"
    pytest

## Commands

### CRC codeword server (`netlab.crc`)

The server takes a bitstream and a divisor, and sends back the data with its
CRC remainder appended. It listens on 127.0.0.1, port 9734. It serves three
clients, each in its own thread, and then stops.

    netlab-crc-server [--host HOST] [--port PORT] [--clients N]
    netlab-crc-client [--host HOST] [--port PORT]

The client first asks for the bitstream, for example `101110`. It then asks
for the divisor, for example `1011`, and prints the codeword it gets back. On
the wire, the client sends each value as a NUL-padded 100-byte field. The
server replies with a NUL-terminated string.

From Python:

    from netlab.crc import compute_crc, make_codeword, request_codeword
    compute_crc("101110", "1011")        # the remainder only
    make_codeword("101110", "1011")      # data followed by the remainder

`compute_crc` raises `ValueError` in these cases:

- the bitstream or the divisor is empty;
- either of them holds a character other than `0` and `1`;
- the divisor does not start with `1`.

### Bit stuffing (`netlab.bitstuff`)

The server looks for a `0` followed by five `1` bits. After those five bits it
inserts a `0`, then returns the stuffed stream. The server listens on
127.0.0.1, port 9734. Both commands use TCP by default, and `--udp` switches
them to UDP.

    netlab-bitstuff-server [--udp] [--host HOST] [--port PORT]
    netlab-bitstuff-client [--udp] [--host HOST] [--port PORT]

The client reads from standard input, in this order:

1. the number of bits, from 1 to 200;
2. that many bits, separated by white space, each one `0` or `1`.

It then prints the stuffed stream it gets back. Every integer goes over the
wire as a native-order 4-byte word, with the length first.

    from netlab.bitstuff import stuff_bits, request_tcp, request_udp
    stuff_bits([0, 1, 1, 1, 1, 1, 1])    # [0, 1, 1, 1, 1, 1, 0, 1]

### IPv4 class details (`netlab.ipclass`)

    netlab-ipclass [IP]

This command takes an address such as `192.168.1.1`, either as an argument or
typed at the prompt. It prints the class, network ID, default mask and
broadcast ID of the address. It rejects these addresses:

- addresses that do not parse;
- addresses with an octet above 255;
- addresses whose first octet is 0, 127, or 224 and above.

    from netlab.ipclass import classify, format_details, is_valid_ip
    print(format_details(classify("10.1.2.3")))

`classify` also handles class D and E addresses, and reports `N/A` for their
network details.

### Sort server (`netlab.sortserver`, Unix domain socket)

The server listens on the socket file `server_socket` in the current
directory, or on the file given with `--path`. It reads five integers and
returns them in descending order.

    netlab-sort-server [--path PATH]
    netlab-sort-client [--path PATH]

### UDP chat (`netlab.udpchat`)

This is a turn-based chat on port 12345. The client speaks first, then the
server replies, and so on. The server listens on all interfaces, and the
client sends to 127.0.0.1 unless told otherwise. End of input stops the chat.

    netlab-udpchat-server [--host HOST] [--port PORT]
    netlab-udpchat-client [--host HOST] [--port PORT]

### TCP chat (`netlab.tcpchat`)

This is a two-way chat on port 8760. Either side can type at any time, and
incoming text shows as it arrives. The server accepts a single client. The
chat ends when the peer disconnects or local input ends.

    netlab-tcpchat-server [--host HOST] [--port PORT]
    netlab-tcpchat-client [--host HOST] [--port PORT]