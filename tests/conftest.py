import socket

import pytest

from filekv.bootstrap import ServerBootstrap
from filekv.client import KeyValueClient
from filekv.configuration import ServerConfiguration
from filekv.key_value_storage import KeyValueStorage


def free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def request_over_tcp(port: int, data: bytes) -> bytes:
    with socket.create_connection(("127.0.0.1", port), timeout=2) as conn:
        conn.sendall(data)
        reply = b""
        while True:
            chunk = conn.recv(1024)
            if not chunk:
                break
            reply += chunk
    return reply


@pytest.fixture
def storage(tmp_path):
    storage = KeyValueStorage(tmp_path / "records")
    storage.open()
    return storage


@pytest.fixture
def configuration(tmp_path):
    return ServerConfiguration(port=free_port(), storage_path=tmp_path / "records", poll_timeout=10)


@pytest.fixture
def server_bootstrap(configuration):
    bootstrap = ServerBootstrap(configuration)
    bootstrap.start()
    yield bootstrap
    bootstrap.stop()


@pytest.fixture
def send_request(server_bootstrap):
    def send(data: bytes) -> bytes:
        return request_over_tcp(server_bootstrap.configuration.port, data)
    return send


@pytest.fixture
def client(server_bootstrap):
    return KeyValueClient(port=server_bootstrap.configuration.port, timeout=2000)
