import socket

import pytest

from tracetcp.address import InetAddress
from tracetcp.errors import PacketError, SocketError
from tracetcp.rawsocket import (
    RCVALL_ON,
    SIO_RCVALL,
    RawPacketInterface,
    RawSocketPacketInterface,
)

LOOPBACK = InetAddress.from_sockaddr(("127.0.0.1", 0))
TARGET = LOOPBACK.with_port(80)


class FakeSocket:
    def __init__(self, socket_type, protocol, fail_ioctl=False, readable=True):
        self.created_with = (socket_type, protocol)
        self.calls = []
        self.closed = False
        self.fail_ioctl = fail_ioctl
        self.readable = readable

    def set_option(self, level, option, value):
        self.calls.append(("set_option", level, option, value))

    def bind(self, address):
        self.calls.append(("bind", address))

    def ioctl(self, operation, value):
        if self.fail_ioctl:
            raise SocketError("Socket.ioctl", 10045)
        self.calls.append(("ioctl", operation, value))

    def send_to(self, address, data):
        self.calls.append(("send_to", address, data))
        return len(data)

    def is_readable(self, timeout):
        self.calls.append(("is_readable", timeout))
        return self.readable

    def recv_from(self, size):
        self.calls.append(("recv_from", size))
        return b"packet", LOOPBACK

    def close(self):
        self.closed = True


def make_factory(**kwargs):
    created = []

    def factory(socket_type, protocol):
        sock = FakeSocket(socket_type, protocol, **kwargs)
        created.append(sock)
        return sock

    return factory, created


def test_base_interface_is_abstract():
    with pytest.raises(TypeError):
        RawPacketInterface()


def test_initialise_configures_raw_socket():
    factory, created = make_factory()
    iface = RawSocketPacketInterface(socket_factory=factory)
    iface.initialise(TARGET)
    assert len(created) == 1
    sock = created[0]
    assert sock.created_with == (socket.SOCK_RAW, socket.IPPROTO_IP)
    assert sock.calls == [
        ("set_option", socket.IPPROTO_IP, socket.IP_HDRINCL, 1),
        ("bind", iface.source_address()),
        ("ioctl", SIO_RCVALL, RCVALL_ON),
    ]


def test_source_address_for_loopback_target():
    factory, _ = make_factory()
    iface = RawSocketPacketInterface(socket_factory=factory)
    iface.initialise(TARGET)
    assert iface.source_address().ip == LOOPBACK.ip
    assert iface.source_address() == iface.source_address()


def test_override_gateway_changes_nothing():
    factory, _ = make_factory()
    iface = RawSocketPacketInterface(socket_factory=factory)
    iface.initialise(TARGET)
    before = iface.source_address()
    iface.override_gateway(LOOPBACK.with_port(1))
    assert iface.source_address() == before


def test_send_packet_goes_to_target():
    factory, created = make_factory()
    iface = RawSocketPacketInterface(socket_factory=factory)
    iface.initialise(TARGET)
    iface.send_packet(b"\x45\x00")
    assert created[0].calls[-1] == ("send_to", TARGET, b"\x45\x00")


def test_receive_packet_returns_data_and_sender():
    factory, created = make_factory()
    iface = RawSocketPacketInterface(socket_factory=factory, buffer_size=2048)
    iface.initialise(TARGET)
    result = iface.receive_packet(250)
    assert result == (b"packet", LOOPBACK)
    assert created[0].calls[-2:] == [("is_readable", 250), ("recv_from", 2048)]


def test_receive_packet_timeout_returns_none():
    factory, created = make_factory(readable=False)
    iface = RawSocketPacketInterface(socket_factory=factory)
    iface.initialise(TARGET)
    assert iface.receive_packet(10) is None
    assert created[0].calls[-1] == ("is_readable", 10)


def test_use_before_initialise_raises():
    iface = RawSocketPacketInterface(socket_factory=make_factory()[0])
    with pytest.raises(PacketError):
        iface.send_packet(b"x")
    with pytest.raises(PacketError):
        iface.receive_packet(0)


def test_failed_initialise_closes_socket():
    factory, created = make_factory(fail_ioctl=True)
    iface = RawSocketPacketInterface(socket_factory=factory)
    with pytest.raises(SocketError):
        iface.initialise(TARGET)
    assert created[0].closed is True
    with pytest.raises(PacketError):
        iface.send_packet(b"x")


def test_context_manager_closes_socket():
    factory, created = make_factory()
    with RawSocketPacketInterface(socket_factory=factory) as iface:
        iface.initialise(TARGET)
    assert created[0].closed is True
    with pytest.raises(PacketError):
        iface.send_packet(b"x")