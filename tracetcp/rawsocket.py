"""Interfaces for sending and receiving whole IP packets."""

from __future__ import annotations

import abc
import socket
from collections.abc import Callable
from types import TracebackType
from typing import Any

from .address import InetAddress
from .errors import PacketError
from .sockets import Socket, local_address_for

__all__ = [
    "RawPacketInterface",
    "RawSocketPacketInterface",
    "SIO_RCVALL",
    "RCVALL_ON",
]

SIO_RCVALL: int = getattr(socket, "SIO_RCVALL", 0x98000001)
RCVALL_ON: int = getattr(socket, "RCVALL_ON", 1)

DEFAULT_BUFFER_SIZE = 65535


class RawPacketInterface(abc.ABC):
    """Sends IP packets to a target and receives packets addressed to this host."""

    @abc.abstractmethod
    def override_gateway(self, gateway: InetAddress) -> None:
        """Send through ``gateway`` instead of the routed one, where supported."""

    @abc.abstractmethod
    def initialise(self, target: InetAddress) -> None:
        """Prepare to exchange packets with ``target``."""

    @abc.abstractmethod
    def source_address(self) -> InetAddress:
        """The local address packets are sent from."""

    @abc.abstractmethod
    def send_packet(self, data: bytes) -> None:
        """Send a complete IP packet."""

    @abc.abstractmethod
    def receive_packet(self, timeout: int) -> tuple[bytes, InetAddress] | None:
        """Wait up to ``timeout`` ms; return the packet and its sender, or None."""


class RawSocketPacketInterface(RawPacketInterface):
    """Packet interface built on a raw IP socket with header inclusion."""

    def __init__(
        self,
        socket_factory: Callable[[int, int], Any] = Socket,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
    ) -> None:
        self._socket_factory = socket_factory
        self._buffer_size = buffer_size
        self._socket: Any = None
        self._target = InetAddress()
        self._source = InetAddress()

    def __enter__(self) -> RawSocketPacketInterface:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        sock, self._socket = self._socket, None
        if sock is not None:
            sock.close()

    def override_gateway(self, gateway: InetAddress) -> None:
        """Raw sockets follow the system routing table, so this does nothing."""

    def source_address(self) -> InetAddress:
        """The local address used to reach the target, looked up once."""
        if self._source.ip == 0:
            self._source = local_address_for(self._target)
        return self._source

    def initialise(self, target: InetAddress) -> None:
        """Open a raw socket bound to the local address and receiving all packets."""
        self._target = target
        local = self.source_address()

        sock = self._socket_factory(socket.SOCK_RAW, socket.IPPROTO_IP)
        try:
            sock.set_option(socket.IPPROTO_IP, socket.IP_HDRINCL, 1)
            sock.bind(local)
            sock.ioctl(SIO_RCVALL, RCVALL_ON)
        except BaseException:
            sock.close()
            raise
        self._socket = sock

    def _require_socket(self) -> Any:
        if self._socket is None:
            raise PacketError("RawSocketPacketInterface: interface not initialised")
        return self._socket

    def send_packet(self, data: bytes) -> None:
        """Send a complete IP packet to the target."""
        self._require_socket().send_to(self._target, data)

    def receive_packet(self, timeout: int) -> tuple[bytes, InetAddress] | None:
        """Wait up to ``timeout`` ms for a packet; return it with its sender, or None."""
        sock = self._require_socket()
        if not sock.is_readable(timeout):
            return None
        return sock.recv_from(self._buffer_size)