import socket

import pytest

from tracetcp.address import InetAddress
from tracetcp.errors import WSAENOTSOCK, SocketError
from tracetcp.sockets import Socket, local_address_for

LOOPBACK = InetAddress.from_sockaddr(("127.0.0.1", 0))


def test_tcp_connect_accept_and_transfer():
    with Socket() as server:
        server.bind(LOOPBACK)
        server.listen()
        assert server.local_address.ip == LOOPBACK.ip
        assert server.local_address.port != 0
        with Socket() as client:
            client.connect(server.local_address)
            assert client.remote_address == server.local_address
            with server.accept() as conn:
                assert conn.remote_address == client.local_address
                assert conn.local_address == server.local_address
                assert client.send(b"ping") == 4
                assert conn.recv() == b"ping"


def test_udp_send_to_and_recv_from():
    with Socket(socket.SOCK_DGRAM) as receiver, Socket(socket.SOCK_DGRAM) as sender:
        receiver.bind(LOOPBACK)
        sender.bind(LOOPBACK)
        assert sender.send_to(receiver.local_address, b"hello") == 5
        assert receiver.is_readable(2000)
        data, origin = receiver.recv_from()
        assert data == b"hello"
        assert origin == sender.local_address


def test_is_readable_false_without_data():
    with Socket(socket.SOCK_DGRAM) as sock:
        sock.bind(LOOPBACK)
        assert sock.is_readable(0) is False


def test_recv_from_respects_size():
    with Socket(socket.SOCK_DGRAM) as receiver, Socket(socket.SOCK_DGRAM) as sender:
        receiver.bind(LOOPBACK)
        sender.send_to(receiver.local_address, b"abc")
        assert receiver.is_readable(2000)
        data, _ = receiver.recv_from(3)
        assert data == b"abc"


def test_operations_after_close_raise():
    sock = Socket()
    sock.close()
    sock.close()
    with pytest.raises(SocketError) as info:
        sock.send(b"x")
    assert info.value.function_name == "Socket.send"
    assert info.value.error_code == WSAENOTSOCK


def test_context_manager_closes():
    with Socket(socket.SOCK_DGRAM) as sock:
        pass
    with pytest.raises(SocketError) as info:
        sock.is_readable(0)
    assert info.value.error_code == WSAENOTSOCK


def test_invalid_ioctl_raises():
    with Socket(socket.SOCK_DGRAM) as sock:
        with pytest.raises(SocketError) as info:
            sock.ioctl(0x12345, 1)
    assert info.value.function_name == "Socket.ioctl"


def test_invalid_option_raises():
    with Socket(socket.SOCK_DGRAM) as sock:
        with pytest.raises(SocketError) as info:
            sock.set_option(9999, 9999, 1)
    assert info.value.function_name == "Socket.setOption"


def test_local_address_for_loopback():
    local = local_address_for(LOOPBACK.with_port(80))
    assert local.ip == LOOPBACK.ip