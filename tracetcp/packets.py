"""Wire formats of Ethernet, ARP, IP, TCP, UDP and ICMP headers, and the internet checksum."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass, field

from .errors import PacketError

__all__ = [
    "ETHERNET_TYPE_IP",
    "ETHERNET_TYPE_ARP",
    "EthernetAddress",
    "EthernetHeader",
    "ARPPacket",
    "ARPRequest",
    "FakeIPHeader",
    "IPHeader",
    "TCPHeader",
    "UDPHeader",
    "ICMPType",
    "ICMPHeader",
    "ICMPEchoHeader",
    "ICMPErrorHeader",
    "checksum",
]

ETHERNET_TYPE_IP = 0x800
ETHERNET_TYPE_ARP = 0x806

_MAC_LENGTH = 6
_HSRP_PREFIXES = ("00:00:0c:07:ac", "00:00:0c:9f:f")


def _require(data: bytes, size: int, what: str) -> None:
    if len(data) < size:
        raise PacketError(f"{what}: need {size} bytes, got {len(data)}")


def _bit(value: int, position: int) -> bool:
    return bool((value >> position) & 1)


@dataclass(frozen=True)
class EthernetAddress:
    """A 6-byte MAC address."""

    octets: bytes = bytes(_MAC_LENGTH)

    def __post_init__(self) -> None:
        object.__setattr__(self, "octets", bytes(self.octets))
        if len(self.octets) != _MAC_LENGTH:
            raise ValueError(f"MAC address must be {_MAC_LENGTH} bytes, got {len(self.octets)}")

    @classmethod
    def broadcast(cls) -> EthernetAddress:
        """The all-ones broadcast address."""
        return cls(b"\xff" * _MAC_LENGTH)

    def __str__(self) -> str:
        return ":".join(f"{octet:02x}" for octet in self.octets)

    def is_hsrp(self) -> bool:
        """Whether this is an HSRP v1 or v2 IPv4 virtual MAC address."""
        text = str(self)
        return text.startswith(_HSRP_PREFIXES)


@dataclass
class EthernetHeader:
    """Ethernet II frame header."""

    dest_addr: EthernetAddress = field(default_factory=EthernetAddress)
    src_addr: EthernetAddress = field(default_factory=EthernetAddress)
    type: int = 0

    _STRUCT = struct.Struct("!6s6sH")
    SIZE = _STRUCT.size

    def pack(self) -> bytes:
        """Encode the header in network byte order."""
        return self._STRUCT.pack(self.dest_addr.octets, self.src_addr.octets, self.type)

    @classmethod
    def unpack(cls, data: bytes) -> EthernetHeader:
        """Decode a header from the start of ``data``."""
        _require(data, cls.SIZE, "EthernetHeader")
        dest, src, eth_type = cls._STRUCT.unpack_from(data)
        return cls(EthernetAddress(dest), EthernetAddress(src), eth_type)


@dataclass
class ARPPacket:
    """ARP packet for Ethernet and IPv4."""

    hard_type: int = 0
    prot_type: int = 0
    hard_size: int = 0
    prot_size: int = 0
    op: int = 0
    sender_ether_addr: EthernetAddress = field(default_factory=EthernetAddress)
    sender_ip: int = 0
    target_ether_addr: EthernetAddress = field(default_factory=EthernetAddress)
    target_ip: int = 0

    _STRUCT = struct.Struct("!HHBBH6sI6sI")
    SIZE = _STRUCT.size

    def pack(self) -> bytes:
        """Encode the packet in network byte order."""
        return self._STRUCT.pack(
            self.hard_type,
            self.prot_type,
            self.hard_size,
            self.prot_size,
            self.op,
            self.sender_ether_addr.octets,
            self.sender_ip,
            self.target_ether_addr.octets,
            self.target_ip,
        )

    @classmethod
    def unpack(cls, data: bytes) -> ARPPacket:
        """Decode a packet from the start of ``data``."""
        _require(data, cls.SIZE, "ARPPacket")
        (hard_type, prot_type, hard_size, prot_size, op,
         sender_mac, sender_ip, target_mac, target_ip) = cls._STRUCT.unpack_from(data)
        return cls(
            hard_type,
            prot_type,
            hard_size,
            prot_size,
            op,
            EthernetAddress(sender_mac),
            sender_ip,
            EthernetAddress(target_mac),
            target_ip,
        )


@dataclass
class ARPRequest:
    """An Ethernet frame carrying an ARP packet."""

    ether_header: EthernetHeader = field(default_factory=EthernetHeader)
    arp: ARPPacket = field(default_factory=ARPPacket)

    SIZE = EthernetHeader.SIZE + ARPPacket.SIZE

    def pack(self) -> bytes:
        """Encode the frame."""
        return self.ether_header.pack() + self.arp.pack()

    @classmethod
    def unpack(cls, data: bytes) -> ARPRequest:
        """Decode a frame from the start of ``data``."""
        _require(data, cls.SIZE, "ARPRequest")
        return cls(
            EthernetHeader.unpack(data),
            ARPPacket.unpack(data[EthernetHeader.SIZE:]),
        )


@dataclass
class FakeIPHeader:
    """Pseudo header used when computing TCP and UDP checksums."""

    source_ip: int = 0
    dest_ip: int = 0
    zero: int = 0
    protocol: int = 0
    length: int = 0

    _STRUCT = struct.Struct("!IIBBH")
    SIZE = _STRUCT.size

    def pack(self) -> bytes:
        """Encode the pseudo header in network byte order."""
        return self._STRUCT.pack(
            self.source_ip, self.dest_ip, self.zero, self.protocol, self.length
        )


@dataclass
class IPHeader:
    """IPv4 header without options."""

    length: int = 0
    version: int = 0
    tos: int = 0
    total_length: int = 0
    id: int = 0
    unused: bool = False
    dont_fragment: bool = False
    more_fragments: bool = False
    fragment_offset: int = 0
    ttl: int = 0
    protocol: int = 0
    header_checksum: int = 0
    source_ip: int = 0
    dest_ip: int = 0

    _STRUCT = struct.Struct("!BBHHHBBHII")
    SIZE = _STRUCT.size

    def header_size(self) -> int:
        """Header length in bytes, from the header length field."""
        return self.length * 4

    def pack(self) -> bytes:
        """Encode the header in network byte order."""
        first = ((self.version & 0xF) << 4) | (self.length & 0xF)
        flags = (
            (int(self.unused) << 15)
            | (int(self.dont_fragment) << 14)
            | (int(self.more_fragments) << 13)
            | (self.fragment_offset & 0x1FFF)
        )
        return self._STRUCT.pack(
            first,
            self.tos,
            self.total_length,
            self.id,
            flags,
            self.ttl,
            self.protocol,
            self.header_checksum,
            self.source_ip,
            self.dest_ip,
        )

    @classmethod
    def unpack(cls, data: bytes) -> IPHeader:
        """Decode the fixed part of a header from the start of ``data``."""
        _require(data, cls.SIZE, "IPHeader")
        (first, tos, total_length, ident, flags, ttl, protocol,
         header_checksum, source_ip, dest_ip) = cls._STRUCT.unpack_from(data)
        return cls(
            length=first & 0xF,
            version=first >> 4,
            tos=tos,
            total_length=total_length,
            id=ident,
            unused=_bit(flags, 15),
            dont_fragment=_bit(flags, 14),
            more_fragments=_bit(flags, 13),
            fragment_offset=flags & 0x1FFF,
            ttl=ttl,
            protocol=protocol,
            header_checksum=header_checksum,
            source_ip=source_ip,
            dest_ip=dest_ip,
        )


@dataclass
class TCPHeader:
    """TCP header followed by MSS, window scale and SACK-permitted options."""

    source_port: int = 0
    dest_port: int = 0
    seq_num: int = 0
    ack_num: int = 0
    data_offset: int = 0
    reserved1: int = 0
    fin: bool = False
    syn: bool = False
    rst: bool = False
    psh: bool = False
    ack: bool = False
    urg: bool = False
    reserved2: int = 0
    window: int = 0
    checksum: int = 0
    urgent_ptr: int = 0
    mss_option_kind: int = 0
    mss_option_len: int = 0
    mss_option_val: int = 0
    option_nop1: int = 0
    win_scale_option_kind: int = 0
    win_scale_option_len: int = 0
    win_scale_option_val: int = 0
    option_nop2: int = 0
    option_nop3: int = 0
    sack_option_kind: int = 0
    sack_option_len: int = 0

    _STRUCT = struct.Struct("!HHIIBBHHHBBHBBBBBBBB")
    SIZE = _STRUCT.size

    def _flag_byte(self) -> int:
        return (
            int(self.fin)
            | (int(self.syn) << 1)
            | (int(self.rst) << 2)
            | (int(self.psh) << 3)
            | (int(self.ack) << 4)
            | (int(self.urg) << 5)
            | ((self.reserved2 & 0x3) << 6)
        )

    def pack(self) -> bytes:
        """Encode the header in network byte order."""
        offset_byte = ((self.data_offset & 0xF) << 4) | (self.reserved1 & 0xF)
        return self._STRUCT.pack(
            self.source_port,
            self.dest_port,
            self.seq_num,
            self.ack_num,
            offset_byte,
            self._flag_byte(),
            self.window,
            self.checksum,
            self.urgent_ptr,
            self.mss_option_kind,
            self.mss_option_len,
            self.mss_option_val,
            self.option_nop1,
            self.win_scale_option_kind,
            self.win_scale_option_len,
            self.win_scale_option_val,
            self.option_nop2,
            self.option_nop3,
            self.sack_option_kind,
            self.sack_option_len,
        )

    @classmethod
    def unpack(cls, data: bytes) -> TCPHeader:
        """Decode a header from the start of ``data``."""
        _require(data, cls.SIZE, "TCPHeader")
        (source_port, dest_port, seq_num, ack_num, offset_byte, flags, window,
         tcp_checksum, urgent_ptr, mss_kind, mss_len, mss_val, nop1, ws_kind,
         ws_len, ws_val, nop2, nop3, sack_kind, sack_len) = cls._STRUCT.unpack_from(data)
        return cls(
            source_port=source_port,
            dest_port=dest_port,
            seq_num=seq_num,
            ack_num=ack_num,
            data_offset=offset_byte >> 4,
            reserved1=offset_byte & 0xF,
            fin=_bit(flags, 0),
            syn=_bit(flags, 1),
            rst=_bit(flags, 2),
            psh=_bit(flags, 3),
            ack=_bit(flags, 4),
            urg=_bit(flags, 5),
            reserved2=flags >> 6,
            window=window,
            checksum=tcp_checksum,
            urgent_ptr=urgent_ptr,
            mss_option_kind=mss_kind,
            mss_option_len=mss_len,
            mss_option_val=mss_val,
            option_nop1=nop1,
            win_scale_option_kind=ws_kind,
            win_scale_option_len=ws_len,
            win_scale_option_val=ws_val,
            option_nop2=nop2,
            option_nop3=nop3,
            sack_option_kind=sack_kind,
            sack_option_len=sack_len,
        )


@dataclass
class UDPHeader:
    """UDP header."""

    source_port: int = 0
    dest_port: int = 0
    length: int = 0
    checksum: int = 0

    _STRUCT = struct.Struct("!HHHH")
    SIZE = _STRUCT.size

    def pack(self) -> bytes:
        """Encode the header in network byte order."""
        return self._STRUCT.pack(self.source_port, self.dest_port, self.length, self.checksum)

    @classmethod
    def unpack(cls, data: bytes) -> UDPHeader:
        """Decode a header from the start of ``data``."""
        _require(data, cls.SIZE, "UDPHeader")
        return cls(*cls._STRUCT.unpack_from(data))


class ICMPType(enum.IntEnum):
    """ICMP message types used by the tracer."""

    ECHO_REP = 0
    DEST_UNREACH = 3
    SOURCE_QUENCH = 4
    REDIRECT = 5
    ECHO_REQ = 8
    TTL_EXPIRED = 11


@dataclass
class ICMPHeader:
    """Common ICMP header: type, code and checksum."""

    icmp_type: int = 0
    code: int = 0
    checksum: int = 0

    _STRUCT = struct.Struct("!BBH")
    SIZE = _STRUCT.size

    def pack(self) -> bytes:
        """Encode the header in network byte order."""
        return ICMPHeader._STRUCT.pack(self.icmp_type, self.code, self.checksum)

    @classmethod
    def unpack(cls, data: bytes) -> ICMPHeader:
        """Decode a header from the start of ``data``."""
        _require(data, ICMPHeader.SIZE, "ICMPHeader")
        return ICMPHeader(*ICMPHeader._STRUCT.unpack_from(data))


@dataclass
class ICMPEchoHeader(ICMPHeader):
    """ICMP echo request or reply header."""

    ident: int = 0
    seq_num: int = 0

    _ECHO_STRUCT = struct.Struct("!BBHHH")
    SIZE = _ECHO_STRUCT.size

    @classmethod
    def request(cls, ident: int, seq_num: int) -> ICMPEchoHeader:
        """An echo request with the given identifier and sequence number."""
        return cls(icmp_type=ICMPType.ECHO_REQ, ident=ident, seq_num=seq_num)

    def pack(self) -> bytes:
        """Encode the header in network byte order."""
        return self._ECHO_STRUCT.pack(
            self.icmp_type, self.code, self.checksum, self.ident, self.seq_num
        )

    @classmethod
    def unpack(cls, data: bytes) -> ICMPEchoHeader:
        """Decode a header from the start of ``data``."""
        _require(data, cls.SIZE, "ICMPEchoHeader")
        return cls(*cls._ECHO_STRUCT.unpack_from(data))


@dataclass
class ICMPErrorHeader(ICMPHeader):
    """ICMP error message header carrying the offending IP header."""

    unused1: int = 0
    unused2: int = 0
    ip_header: IPHeader = field(default_factory=IPHeader)

    _PREFIX_STRUCT = struct.Struct("!BBHHH")
    SIZE = _PREFIX_STRUCT.size + IPHeader.SIZE

    def header_size(self) -> int:
        """Bytes up to the end of the embedded IP header, including its options."""
        return self.ip_header.header_size() + self._PREFIX_STRUCT.size

    def pack(self) -> bytes:
        """Encode the header and the embedded IP header."""
        prefix = self._PREFIX_STRUCT.pack(
            self.icmp_type, self.code, self.checksum, self.unused1, self.unused2
        )
        return prefix + self.ip_header.pack()

    @classmethod
    def unpack(cls, data: bytes) -> ICMPErrorHeader:
        """Decode a header from the start of ``data``."""
        _require(data, cls.SIZE, "ICMPErrorHeader")
        icmp_type, code, icmp_checksum, unused1, unused2 = cls._PREFIX_STRUCT.unpack_from(data)
        ip_header = IPHeader.unpack(data[cls._PREFIX_STRUCT.size:])
        return cls(icmp_type, code, icmp_checksum, unused1, unused2, ip_header)


def checksum(data: bytes) -> int:
    """Internet checksum of ``data`` as a host-order 16-bit value.

    An odd trailing byte is padded with a zero byte.
    """
    data = bytes(data)
    if len(data) % 2:
        data += b"\x00"
    total = sum(word for (word,) in struct.iter_unpack("!H", data))
    while total >> 16:
        total = (total >> 16) + (total & 0xFFFF)
    return ~total & 0xFFFF