import io

import pytest

from tracetcp.cli import (
    TraceSettings,
    display_help,
    display_version,
    populate_settings,
    select_output,
    setup_command_options,
)
from tracetcp.options import CommandOptionError, CommandOptionParser
from tracetcp.output import CondensedTraceOutput, StandardTraceOutput


def _parser(args):
    parser = CommandOptionParser()
    setup_command_options(parser)
    parser.parse(args)
    return parser


def _populate(args):
    parser = _parser(args)
    out, err = io.StringIO(), io.StringIO()
    settings = populate_settings(parser, out, err)
    return settings, out.getvalue(), err.getvalue(), parser


def test_defaults():
    settings, _, err, _ = _populate(["host.example.com"])
    assert settings == TraceSettings(remote_host="host.example.com")
    assert settings.max_hops == 30
    assert settings.max_timeout == 4000
    assert settings.pings_per_hop == 3
    assert err == ""


def test_numeric_options():
    settings, _, _, _ = _populate(["host.example.com", "-m", "60", "-t", "500", "-p", "2", "-h", "4"])
    assert (settings.max_hops, settings.max_timeout, settings.pings_per_hop, settings.start_hop) == (
        60,
        500,
        2,
        4,
    )


def test_flags_and_gateway():
    settings, _, _, _ = _populate(["host.example.com", "-nFR", "-g", "10.0.0.254"])
    assert settings.no_rdns and settings.no_anti_flood and settings.use_raw_sockets
    assert settings.force_gw == "10.0.0.254"


def test_out_of_range_value_reports_error():
    settings, _, err, _ = _populate(["host.example.com", "-m", "300"])
    assert settings is None
    assert err == 'Value "300" out of range: [1..255] on option -m\n'


def test_invalid_number_reports_error():
    settings, _, err, _ = _populate(["host.example.com", "-t", "soon"])
    assert settings is None
    assert err == 'Invalid numeric value: "soon" on option -t\n'


def test_missing_host():
    settings, _, err, _ = _populate(["-n"])
    assert settings is None
    assert err == "Host name not specified. Use -? option for help.\n"


def test_port_range():
    settings, _, _, _ = _populate(["host.example.com", "-r", "20", "25"])
    assert settings.port_range
    assert (settings.start_port, settings.end_port) == (20, 25)


def test_easy_scan_mode():
    settings, _, _, parser = _populate(["host.example.com", "-s", "1", "100"])
    assert settings.no_rdns and settings.port_range
    assert (settings.start_port, settings.end_port) == (1, 100)
    assert (settings.max_hops, settings.start_hop, settings.pings_per_hop) == (1, 128, 1)
    assert isinstance(select_output(parser, io.StringIO()), CondensedTraceOutput)


def test_help_option():
    settings, out, _, _ = _populate(["-?"])
    assert settings is None
    assert "Usage:  tracetcp host [options]" in out
    assert "    -m max_hops   Maximum number of hops to reach target.\n" in out


def test_version_option():
    settings, out, _, _ = _populate(["-v"])
    assert settings is None
    assert out.startswith("\ntracetcp v")


def test_too_many_hosts_is_rejected_by_parser():
    with pytest.raises(CommandOptionError):
        _parser(["a.example.com", "b.example.com"])


def test_unknown_option_is_rejected():
    with pytest.raises(CommandOptionError, match="-x is not a valid command option."):
        _parser(["host.example.com", "-x"])


def test_select_output_defaults_to_standard():
    parser = _parser(["host.example.com"])
    buf = io.StringIO()
    output = select_output(parser, buf)
    assert isinstance(output, StandardTraceOutput)
    output.start_hop(3)
    output.ping_result_timeout()
    output.end_hop()
    output.end_trace()
    assert buf.getvalue() == "3\t*\tRequest timed out.\nTrace Complete.\n"


def test_select_output_condensed_flag():
    parser = _parser(["host.example.com", "-c"])
    buf = io.StringIO()
    output = select_output(parser, buf)
    assert isinstance(output, CondensedTraceOutput)
    output.ping_result_timeout()
    output.end_trace()
    assert buf.getvalue() == "*\t"


def test_display_help_contains_version_banner():
    parser = _parser([])
    help_buf, version_buf = io.StringIO(), io.StringIO()
    display_help(parser, help_buf)
    display_version(version_buf)
    assert help_buf.getvalue().startswith(version_buf.getvalue())
    assert "    -R            Use Raw Sockets to send packets.\n" in help_buf.getvalue()