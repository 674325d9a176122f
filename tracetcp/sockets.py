"""IPv4 sockets that raise SocketError and remember their endpoint addresses."""

from __future__ import annotations

import select
import socket
from types import TracebackType

from .address import InetAddress
from .errors import WSAEINVAL, WSAENOTSOCK, WSAEOPNOTSUPP, SocketError, _winsock_code

__all__ = ["Socket", "local_address_for", "DEFAULT_RECEIVE_SIZE"]

DEFAULT_RECEIVE_SIZE = 512
"""Bytes read by ``recv`` and ``recv_from`` when no size is given."""

_ROUTE_PROBE_PORT = 123


def _error(function_name: str, exc: OSError) -> SocketError:
    return SocketError(function_name, _winsock_code(exc, 0))


class Socket:
    """An AF_INET socket whose failures are raised as :class:`SocketError`."""

    def __init__(self, socket_type: int = socket.SOCK_STREAM, protocol: int = 0) -> None:
        try:
            sock = socket.socket(socket.AF_INET, socket_type, protocol)
        except OSError as exc:
            raise _error("Socket", exc) from exc
        self._sock: socket.socket | None = sock
        self.local_address = InetAddress()
        self.remote_address = InetAddress()

    @classmethod
    def _adopt(cls, sock: socket.socket) -> Socket:
        adopted = cls.__new__(cls)
        adopted._sock = sock
        adopted.local_address = InetAddress()
        adopted.remote_address = InetAddress()
        return adopted

    def __enter__(self) -> Socket:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        try:
            self.close()
        except SocketError:
            if exc_type is None:
                raise

    def _handle(self, function_name: str) -> socket.socket:
        if self._sock is None:
            raise SocketError(function_name, WSAENOTSOCK)
        return self._sock

    def _bound_address(self, fallback: InetAddress) -> InetAddress:
        sock = self._handle("Socket.getsockname")
        try:
            return InetAddress.from_sockaddr(sock.getsockname())
        except (OSError, ValueError):
            return fallback

    def connect(self, address: InetAddress) -> None:
        """Connect to ``address`` and record the local and remote endpoints."""
        sock = self._handle("Socket.connect")
        try:
            sock.connect(address.to_sockaddr())
        except OSError as exc:
            raise _error("Socket.connect", exc) from exc
        self.remote_address = address
        self.local_address = self._bound_address(self.local_address)

    def bind(self, address: InetAddress) -> None:
        """Bind the socket to a local address."""
        sock = self._handle("Socket.bind")
        try:
            sock.bind(address.to_sockaddr())
        except OSError as exc:
            raise _error("Socket.bind", exc) from exc
        self.local_address = self._bound_address(address)

    def listen(self, backlog: int = socket.SOMAXCONN) -> None:
        """Put the socket into listening mode."""
        sock = self._handle("Socket.listen")
        try:
            sock.listen(backlog)
        except OSError as exc:
            raise _error("Socket.listen", exc) from exc

    def accept(self) -> Socket:
        """Accept a connection and return a new socket for it."""
        sock = self._handle("Socket.accept")
        try:
            conn, peer = sock.accept()
        except OSError as exc:
            raise _error("Socket.accept", exc) from exc
        accepted = Socket._adopt(conn)
        accepted.remote_address = InetAddress.from_sockaddr(peer)
        accepted.local_address = accepted._bound_address(InetAddress())
        return accepted

    def set_option(self, level: int, option: int, value: int) -> None:
        """Set an integer socket option."""
        sock = self._handle("Socket.setOption")
        try:
            sock.setsockopt(level, option, value)
        except OSError as exc:
            raise _error("Socket.setOption", exc) from exc

    def ioctl(self, operation: int, value: int) -> None:
        """Apply a socket control operation where the platform supports one."""
        sock = self._handle("Socket.ioctl")
        control = getattr(sock, "ioctl", None)
        if control is None:
            raise SocketError("Socket.ioctl", WSAEOPNOTSUPP)
        try:
            control(operation, value)
        except ValueError:
            raise SocketError("Socket.ioctl", WSAEINVAL) from None
        except OSError as exc:
            raise _error("Socket.ioctl", exc) from exc

    def send(self, data: bytes, flags: int = 0) -> int:
        """Send on a connected socket; return the number of bytes sent."""
        sock = self._handle("Socket.send")
        try:
            return sock.send(data, flags)
        except OSError as exc:
            raise _error("Socket.send", exc) from exc

    def send_to(self, address: InetAddress, data: bytes, flags: int = 0) -> int:
        """Send a datagram to ``address``; return the number of bytes sent."""
        sock = self._handle("Socket.sendTo")
        try:
            return sock.sendto(data, flags, address.to_sockaddr())
        except OSError as exc:
            raise _error("Socket.sendTo", exc) from exc

    def recv(self, size: int = DEFAULT_RECEIVE_SIZE, flags: int = 0) -> bytes:
        """Receive up to ``size`` bytes."""
        sock = self._handle("Socket.recv")
        try:
            return sock.recv(size, flags)
        except OSError as exc:
            raise _error("Socket.recv", exc) from exc

    def recv_from(
        self, size: int = DEFAULT_RECEIVE_SIZE, flags: int = 0
    ) -> tuple[bytes, InetAddress]:
        """Receive up to ``size`` bytes together with the sender's address."""
        sock = self._handle("Socket.recvFrom")
        try:
            data, sender = sock.recvfrom(size, flags)
        except OSError as exc:
            raise _error("Socket.recvFrom", exc) from exc
        return data, InetAddress.from_sockaddr(sender)

    def is_readable(self, timeout_ms: int) -> bool:
        """Wait up to ``timeout_ms`` milliseconds for data; return whether any arrived."""
        sock = self._handle("Socket.isReadable")
        try:
            readable, _, _ = select.select([sock], [], [], timeout_ms / 1000)
        except (OSError, ValueError) as exc:
            if isinstance(exc, OSError):
                raise _error("Socket.isReadable", exc) from exc
            raise SocketError("Socket.isReadable", WSAENOTSOCK) from exc
        return bool(readable)

    def close(self) -> None:
        """Close the socket; closing an already closed socket does nothing."""
        sock, self._sock = self._sock, None
        if sock is None:
            return
        try:
            sock.close()
        except OSError as exc:
            raise _error("Socket.close", exc) from exc


def local_address_for(destination: InetAddress) -> InetAddress:
    """Return the local address the system would use to reach ``destination``."""
    with Socket(socket.SOCK_DGRAM) as probe:
        probe.connect(destination.with_port(_ROUTE_PROBE_PORT))
        return probe.local_address