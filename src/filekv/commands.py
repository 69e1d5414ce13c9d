import abc
from dataclasses import dataclass


@dataclass(frozen=True)
class Command(abc.ABC):
    ...


@dataclass(frozen=True)
class Set(Command):
    key: str
    value: bytes = b""


@dataclass(frozen=True)
class Get(Command):
    key: str


@dataclass(frozen=True)
class Delete(Command):
    key: str


@dataclass(frozen=True)
class Unknown(Command):
    name: bytes
    key: str
