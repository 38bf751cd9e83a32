"""
Pytest configuration and fixtures for http-kit tests.
"""

import http
import io

import pytest
import requests
import responses as responses_lib

from http_kit import Client
from http_kit.core.logging import LoggingConfig
from http_kit.testing import new_mock_client


class ScriptedTransport:
    """
    Транспорт с заранее заданной последовательностью результатов.

    Каждый шаг - исключение (выбрасывается) или requests.Response (возвращается).
    """

    def __init__(self, *steps):
        self.steps = list(steps)
        self.requests = []
        self.kwargs = []

    def send(self, request, **kwargs):
        self.requests.append(request)
        self.kwargs.append(kwargs)
        step = self.steps.pop(0)
        if isinstance(step, BaseException):
            raise step
        return step

    @property
    def calls(self):
        return len(self.requests)


class BrokenBody:
    """Поток тела ответа, чтение которого всегда падает."""

    def __init__(self, error=None):
        self.error = error or OSError("connection reset by peer")
        self.closed = False

    def read(self, amt=None):
        raise self.error

    def close(self):
        self.closed = True


def build_response(status_code=200, body=b"", headers=None, raw=None):
    """Живой (не прочитанный) ответ с телом в BytesIO."""
    response = requests.Response()
    response.status_code = status_code
    response.reason = http.HTTPStatus(status_code).phrase
    response.headers.update(headers or {})
    response.raw = raw if raw is not None else io.BytesIO(body)
    response.url = "https://api.example.com/"
    return response


@pytest.fixture
def base_url():
    """Base URL for testing."""
    return "https://api.example.com"


@pytest.fixture
def mock_responses():
    """Mock HTTP responses using responses library."""
    with responses_lib.RequestsMock() as rsps:
        yield rsps


@pytest.fixture
def client(base_url):
    """Client поверх requests.Session (для тестов с responses)."""
    client = Client("test", base_url=base_url, timeout=10)
    yield client
    client.close()


@pytest.fixture
def mock_pair():
    """(client, mock) с mock транспортом."""
    return new_mock_client("mock")


@pytest.fixture
def scripted_transport():
    """Фабрика ScriptedTransport."""
    return ScriptedTransport


@pytest.fixture
def make_response():
    """Фабрика ответов для ScriptedTransport."""
    return build_response


@pytest.fixture
def broken_body():
    """Фабрика потоков тела, чтение которых падает."""
    return BrokenBody


@pytest.fixture
def logging_config():
    """
    LoggingConfig fixture for testing.

    Example:
        def test_with_logging(logging_config):
            client = Client("test", base_url="https://api.example.com", logging=logging_config)
    """
    return LoggingConfig.create(level="DEBUG", enable_console=True)
