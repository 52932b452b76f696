import socket

import pytest
from fastapi.testclient import TestClient

import greeter.api
import greeter.logstreams
from greeter.models import ServerConfig


def pytest_configure(*args, **kwargs):
    """Pytest calls this hook on startup."""
    # Set log level to DEBUG for all unit tests.
    greeter.logstreams.setup("DEBUG")


def get_server_config(**kwargs) -> ServerConfig:
    return ServerConfig(host="127.0.0.1", port=8080, loglevel="debug", **kwargs)


def free_port() -> int:
    """Return a port that was unused at the time of the call."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@pytest.fixture
def client():
    with TestClient(greeter.api.make_app(get_server_config())) as tc:
        yield tc


@pytest.fixture
def occupied_port():
    """Yield a port that has an active listener on 127.0.0.1."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        sock.listen()
        yield sock.getsockname()[1]
