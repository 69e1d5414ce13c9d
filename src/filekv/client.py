import socket
from typing import Optional

from filekv import protocol


class ResponseError(Exception):
    """Raised when the server answers with an error reply."""


class ConnectionTimeout(Exception):
    """Raised when the server does not accept or answer in time."""


class KeyValueClient:
    """
    A client that opens a new TCP connection for every request, as the server expects.

    :param host: the server address.
    :param port: the server port.
    :param timeout: milliseconds to wait for the connection and for each part of the reply.
    """

    def __init__(self, host: str = "127.0.0.1", port: int = 5000, timeout: int = 1000) -> None:
        self.host = host
        self.port = port
        self.timeout = timeout

    def request(self, data: bytes) -> bytes:
        """
        Send a raw request and return the whole reply.

        :param data: the request line.
        :return: everything the server sent before closing the connection.
        :raises ConnectionTimeout: if the server does not answer in time.
        :raises OSError: if the connection can not be established.
        """
        try:
            with socket.create_connection((self.host, self.port), timeout=self.timeout / 1000) as connection:
                connection.sendall(data)
                connection.shutdown(socket.SHUT_WR)

                reply = []
                while True:
                    chunk = connection.recv(1024)
                    if not chunk:
                        break
                    reply.append(chunk)
                return b"".join(reply)
        except socket.timeout as err:
            raise ConnectionTimeout(f"no answer from {self.host}:{self.port} within {self.timeout} ms") from err

    def set(self, key: str, value: bytes) -> bool:
        reply = self.request(protocol.encode_request("SET", key, value))
        if reply != protocol.OK:
            raise ResponseError(reply)
        return True

    def get(self, key: str) -> Optional[bytes]:
        reply = self.request(protocol.encode_request("GET", key))
        if reply == protocol.NOT_FOUND:
            return None
        if not reply.startswith(protocol.OK) or not reply.endswith(b"\n"):
            raise ResponseError(reply)
        return reply[len(protocol.OK):-1]

    def delete(self, key: str) -> bool:
        reply = self.request(protocol.encode_request("DEL", key))
        if reply != protocol.OK:
            raise ResponseError(reply)
        return True
