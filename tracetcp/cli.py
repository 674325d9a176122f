"""Command line options and settings for the trace tool."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TextIO

from .options import UNNAMED, CommandOption, CommandOptionError, CommandOptionParser
from .output import CondensedTraceOutput, StandardTraceOutput, TraceOutput

__all__ = [
    "VERSION",
    "TraceSettings",
    "display_version",
    "display_help",
    "setup_command_options",
    "populate_settings",
    "select_output",
]

VERSION = "1.0.3"

OPTION_HELP = "?"
OPTION_MAX_HOPS = "m"
OPTION_START_HOP = "h"
OPTION_TIMEOUT = "t"
OPTION_NO_RDNS = "n"
OPTION_VERSION = "v"
OPTION_PORT_RANGE = "r"
OPTION_PINGS_PER_HOP = "p"
OPTION_OUTPUT_MODE = "c"
OPTION_EASY_SCAN = "s"
OPTION_NO_ANTI_FLOOD = "F"
OPTION_FORCE_GW = "g"
OPTION_USE_RAW_SOCKETS = "R"

_MAX_PORT = 0xFFFF


@dataclass
class TraceSettings:
    """Everything a trace run needs to know from the command line."""

    remote_host: str = ""
    use_raw_sockets: bool = False
    force_gw: str = ""
    no_anti_flood: bool = False
    no_rdns: bool = False
    max_hops: int = 30
    start_hop: int = 1
    max_timeout: int = 4000
    port_range: bool = False
    pings_per_hop: int = 3
    start_port: int = 0
    end_port: int = 0


def display_version(out: TextIO) -> None:
    """Write the version banner."""
    out.write(f"\ntracetcp v{VERSION}\n\n")


def display_help(parser: CommandOptionParser, out: TextIO) -> None:
    """Write usage, option and example text."""
    display_version(out)
    out.write(
        "\nUsage:  tracetcp host [options]\n"
        "    where host = hostName|ipAddress[:portNumber|serviceName]\n"
        "    if portNumber or serviceName is not present then port 80 (http) is assumed.\n\n"
        "Options:\n"
    )
    parser.display_options_help(out)
    out.write(
        "\nExamples: \n"
        "    tracetcp www.example.com:80 -m 60\n"
        "    tracetcp mail.example.com:smtp\n"
        "    tracetcp 192.168.0.1 -n -t 500\n\n"
    )


def setup_command_options(parser: CommandOptionParser) -> None:
    """Register every option the tool accepts."""
    for letter, low, high, text in (
        (UNNAMED, 0, 1, ""),
        (OPTION_HELP, 0, 0, "           Displays help information."),
        (OPTION_MAX_HOPS, 1, 1, "max_hops   Maximum number of hops to reach target."),
        (OPTION_START_HOP, 1, 1, "start_hop  Starts trace at hop specified."),
        (OPTION_TIMEOUT, 1, 1, "timeout    Wait timeout milliseconds for each reply."),
        (OPTION_NO_RDNS, 0, 0, "           No reverse DNS lookups for each node."),
        (OPTION_VERSION, 0, 0, "           Displays version information."),
        (OPTION_PORT_RANGE, 2, 2, "p1 p2      Multiple traces from port p1 to p2."),
        (OPTION_PINGS_PER_HOP, 1, 1, "num_pings  # of pings per hop (default 3)."),
        (OPTION_OUTPUT_MODE, 0, 0, "           Select condensed output mode."),
        (
            OPTION_EASY_SCAN,
            2,
            2,
            "p1 p2      Scan ports p1 to p2. Eqiv of: -cnr p1 p2 -h 128 -m 1 -p 1",
        ),
        (OPTION_NO_ANTI_FLOOD, 0, 0, "           Disables the Anti-flood timer."),
        (OPTION_FORCE_GW, 1, 1, "address    Send to remote host using specified gateway."),
        (OPTION_USE_RAW_SOCKETS, 0, 0, "           Use Raw Sockets to send packets."),
    ):
        parser.add_option(CommandOption(letter, low, high, text))


def _settings_from(parser: CommandOptionParser) -> TraceSettings:
    hosts = parser.get_option(UNNAMED)
    if len(hosts.params) != 1:
        raise CommandOptionError("Host name not specified. Use -? option for help.")

    def present(letter: str) -> bool:
        return parser.get_option(letter).present

    def number(letter: str, index: int, low: int, high: int, default: int) -> int:
        return parser.get_option(letter).get_param_as_int(index, low, high, default)

    settings = TraceSettings(
        remote_host=hosts.get_param(0),
        use_raw_sockets=present(OPTION_USE_RAW_SOCKETS),
        force_gw=parser.get_option(OPTION_FORCE_GW).get_param(0, ""),
        no_anti_flood=present(OPTION_NO_ANTI_FLOOD),
        no_rdns=present(OPTION_NO_RDNS),
        max_hops=number(OPTION_MAX_HOPS, 0, 1, 255, 30),
        start_hop=number(OPTION_START_HOP, 0, 1, 255, 1),
        max_timeout=number(OPTION_TIMEOUT, 0, 1, 99999, 4000),
        port_range=present(OPTION_PORT_RANGE),
        pings_per_hop=number(OPTION_PINGS_PER_HOP, 0, 1, 5, 3),
    )
    if settings.port_range:
        settings.start_port = number(OPTION_PORT_RANGE, 0, 0, _MAX_PORT, 0)
        settings.end_port = number(OPTION_PORT_RANGE, 1, 0, _MAX_PORT, 0)

    if present(OPTION_EASY_SCAN):
        settings.no_rdns = True
        settings.max_hops = 1
        settings.port_range = True
        settings.start_port = number(OPTION_EASY_SCAN, 0, 0, _MAX_PORT, 0)
        settings.end_port = number(OPTION_EASY_SCAN, 1, 0, _MAX_PORT, 0)
        settings.start_hop = 128
        settings.pings_per_hop = 1
        parser.get_option(OPTION_OUTPUT_MODE).set_present()
    return settings


def populate_settings(
    parser: CommandOptionParser, out: TextIO, err: TextIO
) -> TraceSettings | None:
    """Build settings from a parsed command line.

    Returns None when help or version was shown, or when an error was written to ``err``.
    """
    if parser.get_option(OPTION_HELP).present:
        display_help(parser, out)
        return None
    if parser.get_option(OPTION_VERSION).present:
        display_version(out)
        return None
    try:
        return _settings_from(parser)
    except CommandOptionError as exc:
        err.write(f"{exc}\n")
        return None


def select_output(parser: CommandOptionParser, out: TextIO) -> TraceOutput:
    """The condensed reporter if requested, otherwise the standard one."""
    if parser.get_option(OPTION_OUTPUT_MODE).present:
        return CondensedTraceOutput(out)
    return StandardTraceOutput(out)