"""IPv4 endpoint addresses and host name resolution."""

from __future__ import annotations

import ipaddress
import socket
from dataclasses import dataclass, replace

from .errors import WSAHOST_NOT_FOUND, WSANO_DATA, SocketError, _winsock_code
from .stringutils import ParseError, parse_unsigned_short

__all__ = ["InetAddress", "resolve_host", "parse_address"]

_MAX_IP = 0xFFFFFFFF
_MAX_PORT = 0xFFFF


@dataclass(frozen=True, order=True)
class InetAddress:
    """An IPv4 address in host order together with a port number."""

    ip: int = 0
    port: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.ip <= _MAX_IP:
            raise ValueError(f"IPv4 address out of range: {self.ip}")
        if not 0 <= self.port <= _MAX_PORT:
            raise ValueError(f"port out of range: {self.port}")

    @property
    def ip_string(self) -> str:
        """The address in dotted decimal notation."""
        return str(ipaddress.IPv4Address(self.ip))

    def __str__(self) -> str:
        return self.ip_string

    @classmethod
    def from_sockaddr(cls, sockaddr: tuple) -> InetAddress:
        """Build from a ``(host, port)`` tuple as returned by the socket module."""
        host, port = sockaddr[0], sockaddr[1]
        return cls(int(ipaddress.IPv4Address(host)), port)

    def to_sockaddr(self) -> tuple[str, int]:
        """Return the ``(host, port)`` tuple used by the socket module."""
        return (self.ip_string, self.port)

    def with_port(self, port: int) -> InetAddress:
        """Return a copy of this address with a different port."""
        return replace(self, port=port)

    def lookup_host_name(self) -> str:
        """Reverse-resolve the address to a host name."""
        try:
            name, _aliases, _addresses = socket.gethostbyaddr(self.ip_string)
        except OSError as exc:
            raise SocketError(
                "lookup_host_name", _winsock_code(exc, WSAHOST_NOT_FOUND)
            ) from exc
        return name


def resolve_host(hostname: str) -> int:
    """Return the host-order IPv4 address of a dotted address or host name."""
    try:
        packed = socket.inet_aton(hostname)
    except (OSError, ValueError):
        packed = None
    if packed is not None:
        value = int.from_bytes(packed, "big")
        # The all-ones address doubles as the "not an address" marker.
        if value != _MAX_IP:
            return value

    try:
        resolved = socket.gethostbyname(hostname)
    except OSError as exc:
        raise SocketError("resolve_host", _winsock_code(exc, WSAHOST_NOT_FOUND)) from exc
    return int(ipaddress.IPv4Address(resolved))


def _service_port(service: str, protocol: str) -> int:
    try:
        return socket.getservbyname(service, protocol)
    except OSError as exc:
        raise SocketError("getservbyname", _winsock_code(exc, WSANO_DATA)) from exc


def parse_address(text: str) -> InetAddress:
    """Parse ``host``, ``host:port`` or ``host:service``; the port defaults to 0."""
    host, sep, port_text = text.partition(":")
    if not sep:
        return InetAddress(resolve_host(text), 0)

    try:
        port = parse_unsigned_short(port_text)
    except ParseError:
        port = _service_port(port_text, "tcp")
    return InetAddress(resolve_host(host), port)