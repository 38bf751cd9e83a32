"""
Mock транспорт для тестов.

Example:
    >>> from http_kit.testing import new_mock_client
    >>> client, mock = new_mock_client("users")
    >>> mock.expect_get("/users").will_respond().with_status_code(204)
    >>> client.get("/users", request.accept_status(204))
    >>> mock.expectations_were_met()
"""

from .mock_client import DEFAULT_MOCK_URL, MockClient, new_mock_client
from .mock_request import MockRequest
from .mock_response import MockResponse

__all__ = [
    "MockClient",
    "MockRequest",
    "MockResponse",
    "new_mock_client",
    "DEFAULT_MOCK_URL",
]
