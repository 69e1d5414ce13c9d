"""
Line protocol spoken by the server.

A request is a single line ``COMMAND KEY [VALUE]``. The command and the key are
whitespace-delimited tokens, the value is everything remaining on the line. A
reply is one of the fixed byte strings below, or ``OK\\n<value>\\n`` for a
successful ``GET``.
"""
import os
import re

from filekv.commands import Command, Set, Get, Delete, Unknown
from filekv.configuration import ProtocolLimits

OK = b"OK\n"
ERROR = b"ERROR\n"
NOT_FOUND = b"NOTFOUND\n"
MALFORMED = b"ERROR: Incorrect number of arguments\n"

_TOKEN = re.compile(rb"\s*(\S+)")
_VALUE = re.compile(rb"\s*([^\n]*)")

_COMMANDS = {
    b"SET": lambda key, value: Set(key, value),
    b"GET": lambda key, value: Get(key),
    b"DEL": lambda key, value: Delete(key),
}


class MalformedRequestError(ValueError):
    """Raised when a request carries fewer than two tokens."""


def parse_request(data: bytes, limits: ProtocolLimits = ProtocolLimits()) -> Command:
    """
    Parse a raw request into a command.

    Tokens longer than their limit are truncated to it. A trailing carriage
    return is dropped from the value so that CRLF terminated lines are accepted.

    :param data: the bytes received from the client.
    :param limits: the length limits of the command, key and value.
    :return: the parsed command, ``Unknown`` if the command name is not recognised.
    :raises MalformedRequestError: if the command or the key is missing.
    """
    name_match = _TOKEN.match(data)
    key_match = _TOKEN.match(data, name_match.end()) if name_match is not None else None

    if key_match is None:
        raise MalformedRequestError(f"expected at least 2 tokens in {data!r}")

    value = _VALUE.match(data, key_match.end()).group(1)
    if value.endswith(b"\r"):
        value = value[:-1]

    name = name_match.group(1)[:limits.max_command_length]
    key = os.fsdecode(key_match.group(1)[:limits.max_key_length])
    value = value[:limits.max_value_length]

    factory = _COMMANDS.get(name)
    if factory is None:
        return Unknown(name, key)

    return factory(key, value)


def encode_request(command: str, key: str, value: bytes = b"") -> bytes:
    request = command.encode() + b" " + os.fsencode(key)
    if value:
        request += b" " + value
    return request + b"\n"


def found(value: bytes) -> bytes:
    return OK + value + b"\n"
