"""Console reporters for the progress and results of a TCP trace."""

from __future__ import annotations

import abc
import sys
from typing import TextIO

from .address import InetAddress
from .errors import SocketError

__all__ = ["TraceOutput", "StandardTraceOutput", "CondensedTraceOutput"]


class TraceOutput(abc.ABC):
    """Receives the events of a trace as it runs."""

    @abc.abstractmethod
    def start_trace(
        self, target: InetAddress, no_rdns: bool, max_hops: int, no_port: bool
    ) -> None:
        """A trace to ``target`` is starting."""

    @abc.abstractmethod
    def start_hop(self, hop_number: int) -> None:
        """Probing of hop ``hop_number`` is starting."""

    @abc.abstractmethod
    def ping_result_good(self, resp_from: InetAddress, ping_time: int) -> None:
        """A probe was answered by ``resp_from`` after ``ping_time`` ms."""

    @abc.abstractmethod
    def ping_result_bad(self, resp_from: InetAddress, message: str) -> None:
        """``resp_from`` reported an error for a probe."""

    @abc.abstractmethod
    def ping_result_timeout(self) -> None:
        """A probe got no answer in time."""

    @abc.abstractmethod
    def destination_reached(
        self, resp_from: InetAddress, ping_time: int, port_open: bool
    ) -> None:
        """The target answered, with the port either open or closed."""

    @abc.abstractmethod
    def end_hop(self) -> None:
        """Probing of the current hop has finished."""

    @abc.abstractmethod
    def end_trace(self) -> None:
        """The trace has finished."""


def _host_name(address: InetAddress) -> str | None:
    try:
        return address.lookup_host_name()
    except SocketError:
        return None


class _ConsoleTraceOutput(TraceOutput):
    """Shared per-hop reporting for the console formats."""

    def __init__(self, out: TextIO | None = None) -> None:
        self.out = out if out is not None else sys.stdout
        self.no_rdns = False
        self.good_pings = 0
        self.last_good_response = InetAddress()

    def _write(self, text: str) -> None:
        self.out.write(text)

    def _reset_hop(self) -> None:
        self.good_pings = 0

    def ping_result_good(self, resp_from: InetAddress, ping_time: int) -> None:
        self._write(f"{ping_time} ms\t")
        self.good_pings += 1
        self.last_good_response = resp_from

    def ping_result_bad(self, resp_from: InetAddress, message: str) -> None:
        self._write(f"\t{resp_from.ip_string} reports: {message}\n")

    def ping_result_timeout(self) -> None:
        self._write("*\t")

    def end_hop(self) -> None:
        if not self.good_pings:
            self._write("Request timed out.\n")
            return
        self._write(f"{self.last_good_response.ip_string}\t")
        if not self.no_rdns:
            name = _host_name(self.last_good_response)
            if name is not None:
                self._write(f"[{name}]")
        self._write("\n")


class StandardTraceOutput(_ConsoleTraceOutput):
    """Verbose, traceroute-like output."""

    def start_trace(
        self, target: InetAddress, no_rdns: bool, max_hops: int, no_port: bool
    ) -> None:
        self.no_rdns = no_rdns
        self._write(f"\nTracing route to {target.ip_string}")
        if not no_rdns:
            name = _host_name(target)
            if name is not None:
                self._write(f" [{name}]")
        if not no_port:
            self._write(f" on port {target.port}")
        self._write(f"\nOver a maximum of {max_hops} hops.\n")

    def start_hop(self, hop_number: int) -> None:
        self._write(f"{hop_number}\t")
        self._reset_hop()

    def destination_reached(
        self, resp_from: InetAddress, ping_time: int, port_open: bool
    ) -> None:
        self._write(f"Destination Reached in {ping_time} ms. ")
        if port_open:
            self._write(f"Connection established to {resp_from.ip_string}")
        else:
            self._write(f"Port closed on {resp_from.ip_string}")
        self._write("\n")

    def end_trace(self) -> None:
        self._write("Trace Complete.\n")


class CondensedTraceOutput(_ConsoleTraceOutput):
    """Compact output with the target on every line, suited to port scans."""

    def __init__(self, out: TextIO | None = None) -> None:
        super().__init__(out)
        self.target = InetAddress()

    def start_trace(
        self, target: InetAddress, no_rdns: bool, max_hops: int, no_port: bool
    ) -> None:
        self.target = target
        self.no_rdns = no_rdns

    def start_hop(self, hop_number: int) -> None:
        self._write(f"[{self.target.ip_string}:{self.target.port}]  {hop_number}\t")
        self._reset_hop()

    def destination_reached(
        self, resp_from: InetAddress, ping_time: int, port_open: bool
    ) -> None:
        self._write(f"Dest. in {ping_time} ms. ")
        if port_open:
            self._write(f"Port OPEN on {resp_from.ip_string}")
        else:
            self._write(f"Port CLOSED on {resp_from.ip_string}")
        self._write("\n")

    def end_trace(self) -> None:
        pass