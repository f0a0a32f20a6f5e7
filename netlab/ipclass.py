"""Classful IPv4 address analysis."""

from __future__ import annotations

import argparse
import re
from dataclasses import dataclass

_OCTETS = re.compile(r"\s*\+?(\d+)\.\s*\+?(\d+)\.\s*\+?(\d+)\.\s*\+?(\d+)")
_MAX_INPUT = 16

# (lowest first octet, highest first octet, class, octets kept in the network id)
_CLASSES = (
    (1, 126, "A", 1),
    (128, 191, "B", 2),
    (192, 223, "C", 3),
    (224, 239, "D", None),
    (240, 255, "E", None),
)


@dataclass(frozen=True)
class IPDetails:
    """Class, network id, default mask and broadcast id of an IPv4 address."""

    ip: str
    ip_class: str
    net_id: str
    default_mask: str
    broadcast_id: str


def parse_octets(ip: str) -> tuple[int, int, int, int]:
    """Read four dot-separated decimal numbers from the start of *ip*."""
    match = _OCTETS.match(ip)
    if match is None:
        raise ValueError(f"cannot parse IPv4 address: {ip!r}")
    first, second, third, fourth = (int(group) for group in match.groups())
    return first, second, third, fourth


def is_valid_ip(ip: str) -> bool:
    """Return whether *ip* is a well-formed ordinary unicast address."""
    try:
        octets = parse_octets(ip)
    except ValueError:
        return False
    if any(octet > 255 for octet in octets):
        return False
    first = octets[0]
    return not (first == 0 or first == 127 or first >= 224)


def classify(ip: str) -> IPDetails:
    """Return the classful details of *ip*."""
    octets = parse_octets(ip)
    first = octets[0]
    for low, high, ip_class, kept in _CLASSES:
        if low <= first <= high:
            break
    else:
        raise ValueError("Invalid IP address.")

    if kept is None:
        return IPDetails(ip, ip_class, "N/A", "N/A", "N/A")
    network = [str(octet) for octet in octets[:kept]]
    rest = 4 - kept
    return IPDetails(
        ip=ip,
        ip_class=ip_class,
        net_id=".".join(network + ["0"] * rest),
        default_mask=".".join(["255"] * kept + ["0"] * rest),
        broadcast_id=".".join(network + ["255"] * rest),
    )


def format_details(details: IPDetails) -> str:
    """Render *details* as a multi-line report."""
    return "\n".join((
        f"IP Address: {details.ip}",
        f"Class: {details.ip_class}",
        f"Net ID: {details.net_id}",
        f"Default Mask: {details.default_mask}",
        f"Broadcast ID: {details.broadcast_id}",
    ))


def main(argv: list[str] | None = None) -> int:
    """Classify an address given on the command line or typed at the prompt."""
    parser = argparse.ArgumentParser(description="Show the class details of an IPv4 address.")
    parser.add_argument("ip", nargs="?")
    args = parser.parse_args(argv)

    text = args.ip
    if text is None:
        try:
            text = input("Enter an IPv4 address (e.g., 192.168.1.1): ")
        except EOFError:
            text = ""
    words = text.split()
    ip = words[0][:_MAX_INPUT] if words else ""

    if not is_valid_ip(ip):
        print("Invalid IP address format or reserved address.")
        return 1
    print(format_details(classify(ip)))
    return 0