"""Socket and packet errors, with descriptions of Winsock error codes."""

from __future__ import annotations

import errno
import socket

__all__ = [
    "SocketError",
    "PacketError",
    "describe_error",
    "UNKNOWN_ERROR_MESSAGE",
]

WSAEINTR = 10004
WSAEBADF = 10009
WSAEACCES = 10013
WSAEFAULT = 10014
WSAEINVAL = 10022
WSAEMFILE = 10024
WSAEWOULDBLOCK = 10035
WSAEINPROGRESS = 10036
WSAEALREADY = 10037
WSAENOTSOCK = 10038
WSAEDESTADDRREQ = 10039
WSAEMSGSIZE = 10040
WSAEPROTOTYPE = 10041
WSAENOPROTOOPT = 10042
WSAEPROTONOSUPPORT = 10043
WSAESOCKTNOSUPPORT = 10044
WSAEOPNOTSUPP = 10045
WSAEPFNOSUPPORT = 10046
WSAEAFNOSUPPORT = 10047
WSAEADDRINUSE = 10048
WSAEADDRNOTAVAIL = 10049
WSAENETDOWN = 10050
WSAENETUNREACH = 10051
WSAENETRESET = 10052
WSAECONNABORTED = 10053
WSAECONNRESET = 10054
WSAENOBUFS = 10055
WSAEISCONN = 10056
WSAENOTCONN = 10057
WSAESHUTDOWN = 10058
WSAETOOMANYREFS = 10059
WSAETIMEDOUT = 10060
WSAECONNREFUSED = 10061
WSAELOOP = 10062
WSAENAMETOOLONG = 10063
WSAEHOSTDOWN = 10064
WSAEHOSTUNREACH = 10065
WSAENOTEMPTY = 10066
WSAEPROCLIM = 10067
WSAEUSERS = 10068
WSAEDQUOT = 10069
WSAESTALE = 10070
WSAEREMOTE = 10071
WSASYSNOTREADY = 10091
WSAVERNOTSUPPORTED = 10092
WSANOTINITIALISED = 10093
WSAEDISCON = 10101
WSAHOST_NOT_FOUND = 11001
WSANO_DATA = 11004

UNKNOWN_ERROR_MESSAGE = "Invalid Error Code"

# (Winsock code, matching errno name or "", message). The first entry for a code wins.
_ERROR_TABLE: tuple[tuple[int, str, str], ...] = (
    (WSAEINTR, "EINTR", "Interrupted system call"),
    (WSAEBADF, "EBADF", "Bad file number"),
    (WSAEACCES, "EACCES", "Permission denied"),
    (WSAEFAULT, "EFAULT", "Bad address"),
    (WSAEINVAL, "EINVAL", "Invalid argument"),
    (WSAEMFILE, "EMFILE", "Too many open sockets"),
    (WSAEWOULDBLOCK, "EWOULDBLOCK", "Operation would block"),
    (WSAEWOULDBLOCK, "EAGAIN", "Operation would block"),
    (WSAEINPROGRESS, "EINPROGRESS", "Operation now in progress"),
    (WSAEALREADY, "EALREADY", "Operation already in progress"),
    (WSAENOTSOCK, "ENOTSOCK", "Socket operation on non-socket"),
    (WSAEDESTADDRREQ, "EDESTADDRREQ", "Destination address required"),
    (WSAEMSGSIZE, "EMSGSIZE", "Message too long"),
    (WSAEPROTOTYPE, "EPROTOTYPE", "Protocol wrong type for socket"),
    (WSAENOPROTOOPT, "ENOPROTOOPT", "Bad protocol option"),
    (WSAEPROTONOSUPPORT, "EPROTONOSUPPORT", "Protocol not supported"),
    (WSAESOCKTNOSUPPORT, "ESOCKTNOSUPPORT", "Socket type not supported"),
    (WSAEOPNOTSUPP, "EOPNOTSUPP", "Operation not supported on socket"),
    (WSAEPFNOSUPPORT, "EPFNOSUPPORT", "Protocol family not supported"),
    (WSAEAFNOSUPPORT, "EAFNOSUPPORT", "Address family not supported"),
    (WSAEADDRINUSE, "EADDRINUSE", "Address already in use"),
    (WSAEADDRNOTAVAIL, "EADDRNOTAVAIL", "Can't assign requested address"),
    (WSAENETDOWN, "ENETDOWN", "Network is down"),
    (WSAENETUNREACH, "ENETUNREACH", "Network is unreachable"),
    (WSAENETRESET, "ENETRESET", "Net connection reset"),
    (WSAECONNABORTED, "ECONNABORTED", "Software caused connection abort"),
    (WSAECONNRESET, "ECONNRESET", "Connection reset by peer"),
    (WSAENOBUFS, "ENOBUFS", "No buffer space available"),
    (WSAEISCONN, "EISCONN", "Socket is already connected"),
    (WSAENOTCONN, "ENOTCONN", "Socket is not connected"),
    (WSAESHUTDOWN, "ESHUTDOWN", "Can't send after socket shutdown"),
    (WSAETOOMANYREFS, "ETOOMANYREFS", "Too many references, can't splice"),
    (WSAETIMEDOUT, "ETIMEDOUT", "Connection timed out"),
    (WSAECONNREFUSED, "ECONNREFUSED", "Connection refused"),
    (WSAELOOP, "ELOOP", "Too many levels of symbolic links"),
    (WSAENAMETOOLONG, "ENAMETOOLONG", "File name too long"),
    (WSAEHOSTDOWN, "EHOSTDOWN", "Host is down"),
    (WSAEHOSTUNREACH, "EHOSTUNREACH", "No route to host"),
    (WSAENOTEMPTY, "ENOTEMPTY", "Directory not empty"),
    (WSAEPROCLIM, "EPROCLIM", "Too many processes"),
    (WSAEUSERS, "EUSERS", "Too many users"),
    (WSAEDQUOT, "EDQUOT", "Disc quota exceeded"),
    (WSAESTALE, "ESTALE", "Stale NFS file handle"),
    (WSAEREMOTE, "EREMOTE", "Too many levels of remote in path"),
    (WSAEINVAL, "", "One or more parameters are invalid"),
    (WSASYSNOTREADY, "", "Network system is unavailable"),
    (WSAVERNOTSUPPORTED, "", "Winsock version out of range"),
    (WSANOTINITIALISED, "", "WSAStartup not yet called"),
    (WSAEDISCON, "", "Graceful shutdown in progress"),
    (WSAHOST_NOT_FOUND, "", "Host not found"),
    (WSANO_DATA, "", "No host data of that type was found"),
)

_MESSAGES: dict[int, str] = {}
_CODES_BY_ERRNO_NAME: dict[str, int] = {}
for _code, _name, _message in _ERROR_TABLE:
    _MESSAGES.setdefault(_code, _message)
    if _name:
        _CODES_BY_ERRNO_NAME.setdefault(_name, _code)


def describe_error(code: int) -> str:
    """Return the description of a Winsock error code."""
    return _MESSAGES.get(code, UNKNOWN_ERROR_MESSAGE)


class SocketError(Exception):
    """A failed socket or name service operation."""

    def __init__(self, function_name: str, error_code: int) -> None:
        self.function_name = function_name
        self.error_code = error_code
        super().__init__(f"{function_name}: {self.error_string}")

    @property
    def error_string(self) -> str:
        """Description of the error code."""
        return describe_error(self.error_code)


class PacketError(Exception):
    """A failure while building, sending or receiving raw packets."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def _winsock_code(exc: OSError, fallback: int) -> int:
    """Translate an operating system error into the matching Winsock code."""
    winerror = getattr(exc, "winerror", None)
    if winerror:
        return winerror
    if isinstance(exc, (socket.gaierror, socket.herror)):
        return WSAHOST_NOT_FOUND
    if exc.errno is None:
        return fallback
    name = errno.errorcode.get(exc.errno, "")
    return _CODES_BY_ERRNO_NAME.get(name, exc.errno)