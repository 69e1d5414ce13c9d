from dataclasses import dataclass, field
from os import PathLike
from typing import Optional


@dataclass(frozen=True)
class ProtocolLimits:
    max_command_length: int = 15
    max_key_length: int = 255
    max_value_length: int = 767


@dataclass
class ServerConfiguration:
    host: str = "127.0.0.1"
    port: int = 5000
    backlog: int = 10
    buffer_size: int = 1024
    storage_path: str | PathLike = "."
    # milliseconds between checks for stop() while waiting for a connection
    poll_timeout: int = 100
    # seconds a connection may stay silent, None blocks until the client sends or closes
    connection_timeout: Optional[float] = None
    limits: ProtocolLimits = field(default_factory=ProtocolLimits)

    def url(self) -> str:
        return f"tcp://{self.host}:{self.port}"
