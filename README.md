# tracetcp

Building blocks for tracing the route to a host with TCP packets
instead of ICMP or UDP probes. Firewalls often drop those probes, so a
TCP trace to an open service port tends to get further.

The package has no runtime dependencies beyond the standard library.

## Modules

- `tracetcp.stringutils`: `trim_left`, `trim_right` and `trim_both`
  (spaces and tabs by default), and strict number parsing with
  `parse_int`, `parse_unsigned_int`, `parse_short`,
  `parse_unsigned_short` and `parse_double`. They raise `ParseError`
  (a `ValueError`) when the text is not one complete number in range.
- `tracetcp.options`: a single-letter option parser. `CommandOption`
  holds an option letter, its minimum and maximum parameter count, its
  help text and the parameters collected for it. `get_param` and
  `get_param_as_int` return a default when one is given and the option
  was absent, and `get_param_as_int` checks bounds.
  `CommandOptionParser.parse` takes the argument list without the
  program name. `display_options_help` writes one line per option.
  Every problem is raised as `CommandOptionError`.
- `tracetcp.timeout`: `TimeOut`, a millisecond period with
  `has_timed_out`, `remaining_time` and `elapsed_time`. The clock can be
  injected.
- `tracetcp.errors`: `SocketError`, which carries `function_name`,
  `error_code` and `error_string`, and `PacketError`. `describe_error`
  turns a Winsock error code into a message, or `"Invalid Error Code"`
  for an unknown code.
- `tracetcp.address`: `InetAddress`, a frozen IPv4 address in host
  order with a port. It provides `ip_string`, `from_sockaddr`,
  `to_sockaddr`, `with_port` and `lookup_host_name`. `resolve_host`
  accepts a dotted address or a host name. `parse_address` reads `host`,
  `host:port` or `host:service`; the port is 0 when none is given.
  Lookup failures raise `SocketError`.
- `tracetcp.packets`: the header structures `EthernetAddress`,
  `EthernetHeader`, `ARPPacket`, `ARPRequest`, `FakeIPHeader`,
  `IPHeader`, `TCPHeader` (with MSS, window-scale and SACK-permitted
  option fields), `UDPHeader`, `ICMPHeader`, `ICMPEchoHeader` and
  `ICMPErrorHeader`. Each one packs to network byte order, and all but
  `FakeIPHeader` unpack. Also in this module:
  - `ICMPType`, the ICMP message types;
  - `EthernetAddress.broadcast` and `EthernetAddress.is_hsrp`, which
    recognises HSRP v1/v2 virtual MAC addresses;
  - `checksum`, the Internet checksum.

  Unpacking data that is too short raises `PacketError`.
- `tracetcp.sockets`: `Socket`, an IPv4 socket wrapper and context
  manager that raises `SocketError` and records `local_address` and
  `remote_address`. `local_address_for` returns the local address the
  system would use to reach a destination.
- `tracetcp.rawsocket`: the abstract `RawPacketInterface` and
  `RawSocketPacketInterface`. The latter is a raw IP socket with header
  inclusion, bound to the local address, with receive-all switched on.
  `receive_packet` returns `(data, sender)` or `None` on timeout.
  `override_gateway` does nothing for raw sockets.
- `tracetcp.output`: the `TraceOutput` event interface and two console
  reporters. `StandardTraceOutput` gives verbose output and finishes
  with "Trace Complete.". `CondensedTraceOutput` prefixes each hop with
  `[ip:port]`. Both reporters write to any text stream (stdout by
  default). Unless reverse lookups are turned off, they add the host
  name of each responding node.
- `tracetcp.cli`: the tracer's option set. `setup_command_options`
  registers it, `populate_settings` turns parsed options into
  `TraceSettings`, `select_output` picks the reporter, and
  `display_help` and `display_version` write the help and version text.

## Options registered by `setup_command_options`

```
host           hostName|ipAddress[:portNumber|serviceName]
-?             Displays help information.
-m max_hops    Maximum number of hops to reach target (1..255, default 30).
-h start_hop   Starts trace at hop specified (1..255, default 1).
-t timeout     Wait timeout milliseconds for each reply (1..99999, default 4000).
-n             No reverse DNS lookups for each node.
-v             Displays version information.
-r p1 p2       Multiple traces from port p1 to p2.
-p num_pings   Number of pings per hop (1..5, default 3).
-c             Select condensed output mode.
-s p1 p2       Scan ports p1 to p2. Equivalent of: -cnr p1 p2 -h 128 -m 1 -p 1
-F             Disables the anti-flood timer.
-g address     Send to remote host using specified gateway.
-R             Use raw sockets to send packets.
```

Several letters can share one dash, as in `-cn`. Parameters that
follow belong to the last letter named.

## Example

```python
import sys

from tracetcp.cli import populate_settings, select_output, setup_command_options
from tracetcp.options import CommandOptionParser
from tracetcp.packets import checksum

parser = CommandOptionParser()
setup_command_options(parser)
parser.parse(["example.com:80", "-n", "-m", "20"])

settings = populate_settings(parser, sys.stdout, sys.stderr)
if settings is not None:
    print(settings.remote_host, settings.max_hops, settings.no_rdns)
    reporter = select_output(parser, sys.stdout)

print(hex(checksum(b"\x45\x00\x00\x1c")))
```

`populate_settings` returns `None` in three cases: help was shown,
version was shown, or an error was written to the error stream.

Opening raw sockets usually needs administrator rights.

## What the package does not do

- It does not send probes and step through hops. No function runs a
  trace from `TraceSettings` and feeds a `TraceOutput`.
- It has no installed command. The `tracetcp.cli` functions parse
  options and build settings, but nothing here starts a trace from the
  command line.
- It has no packet-capture interface. `RawSocketPacketInterface` is the
  only `RawPacketInterface`, so it cannot send through a forced gateway
  and cannot do ARP lookups on the wire.

## Running the tests

Install the `test` extra and run `pytest` from the project directory.