import pytest

from tracetcp.stringutils import (
    ParseError,
    parse_double,
    parse_int,
    parse_short,
    parse_unsigned_int,
    parse_unsigned_short,
    trim_both,
    trim_left,
    trim_right,
)


def test_trim_left():
    assert trim_left(" xx ") == "xx "


def test_trim_right():
    assert trim_right(" xx ") == " xx"


def test_trim_both():
    assert trim_both("  xx  ") == "xx"


def test_trim_nothing_to_trim():
    assert trim_left(trim_right("xx")) == "xx"


def test_trim_empty():
    assert trim_left(trim_right("")) == ""


def test_trim_all_whitespace_gives_empty():
    assert trim_both(" \t \t") == ""


def test_trim_custom_chars():
    assert trim_both("--ab--", "-") == "ab"


def test_trim_tabs():
    assert trim_both("\tab\t") == "ab"


def test_parse_int_plain():
    assert parse_int("42") == 42


def test_parse_int_surrounded_by_spaces():
    assert parse_int("  17\t") == 17


def test_parse_int_signs():
    assert parse_int("-5") == -5
    assert parse_int("+5") == 5


@pytest.mark.parametrize("text", ["", "   ", "abc", "12abc", "1.5", "1 2", "0x10", "1_000"])
def test_parse_int_rejects_invalid(text):
    with pytest.raises(ParseError):
        parse_int(text)


def test_parse_int_limits():
    assert parse_int("2147483647") == 2147483647
    assert parse_int("-2147483648") == -2147483648
    with pytest.raises(ParseError):
        parse_int("2147483648")


def test_parse_unsigned_int_limits():
    assert parse_unsigned_int("4294967295") == 4294967295
    with pytest.raises(ParseError):
        parse_unsigned_int("4294967296")
    with pytest.raises(ParseError):
        parse_unsigned_int("-1")


def test_parse_short_limits():
    assert parse_short("-32768") == -32768
    assert parse_short("32767") == 32767
    with pytest.raises(ParseError):
        parse_short("32768")


def test_parse_unsigned_short_limits():
    assert parse_unsigned_short("65535") == 65535
    assert parse_unsigned_short("0") == 0
    with pytest.raises(ParseError):
        parse_unsigned_short("65536")


def test_parse_unsigned_short_rejects_service_name():
    with pytest.raises(ParseError):
        parse_unsigned_short("smtp")


def test_parse_double_values():
    assert parse_double("1.5") == 1.5
    assert parse_double(" .25 ") == 0.25
    assert parse_double("-3") == -3.0


@pytest.mark.parametrize("text", ["", "abc", "1.5x", "e5", "inf", "nan", "1e400"])
def test_parse_double_rejects_invalid(text):
    with pytest.raises(ParseError):
        parse_double(text)


def test_parse_error_is_value_error():
    with pytest.raises(ValueError):
        parse_int("nope")