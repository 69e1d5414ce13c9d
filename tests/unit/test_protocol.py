import pytest

from filekv.commands import Set, Get, Delete, Unknown
from filekv.configuration import ProtocolLimits
from filekv.protocol import parse_request, encode_request, found, MalformedRequestError


@pytest.mark.parametrize("data, expected_command", [
    (b"SET foo hello world\n", Set("foo", b"hello world")),
    (b"SET foo bar", Set("foo", b"bar")),
    (b"SET foo\n", Set("foo", b"")),
    (b"GET foo\n", Get("foo")),
    (b"  GET \t foo  \n", Get("foo")),
    (b"DEL foo\n", Delete("foo")),
    (b"FOO bar\n", Unknown(b"FOO", "bar")),
    (b"set foo bar\n", Unknown(b"set", "foo")),
])
def test_parse_request(data, expected_command):
    assert parse_request(data) == expected_command


@pytest.mark.parametrize("data", [b"", b"\n", b"   \r\n", b"SET", b"SET\n", b"GET   \n"])
def test_parse_request_with_less_than_two_tokens_is_malformed(data):
    with pytest.raises(MalformedRequestError):
        parse_request(data)


def test_value_keeps_inner_and_trailing_whitespace():
    assert parse_request(b"SET foo   a  b\tc  \n") == Set("foo", b"a  b\tc  ")


def test_value_stops_at_newline():
    assert parse_request(b"SET foo first line\nsecond line\n") == Set("foo", b"first line")


def test_crlf_terminated_request():
    assert parse_request(b"SET foo bar\r\n") == Set("foo", b"bar")


def test_overlong_tokens_are_truncated():
    limits = ProtocolLimits()
    command = parse_request(b"SET " + b"k" * 300 + b" " + b"v" * 1000 + b"\n", limits)

    assert command == Set("k" * limits.max_key_length, b"v" * limits.max_value_length)


def test_overlong_command_is_unknown():
    command = parse_request(b"SETSETSETSETSETSET foo\n")

    assert command == Unknown(b"SETSETSETSETSET", "foo")


def test_custom_limits():
    limits = ProtocolLimits(max_command_length=3, max_key_length=2, max_value_length=4)

    assert parse_request(b"SET abc 123456\n", limits) == Set("ab", b"1234")


def test_encode_request():
    assert encode_request("SET", "foo", b"hello world") == b"SET foo hello world\n"
    assert encode_request("GET", "foo") == b"GET foo\n"


def test_found_reply():
    assert found(b"hello world") == b"OK\nhello world\n"
    assert found(b"") == b"OK\n\n"
