"""
Интеграционные тесты: Client поверх requests.Session.

HTTP ответы эмулируются библиотекой responses на уровне адаптера.
"""

import pytest
import requests
import responses as responses_lib

from http_kit import Client, request, unmarshal_json
from http_kit.core.directives import RESERVED_HEADERS
from http_kit.core.exceptions import (
    MaxRetriesExceededError,
    TransportError,
    UnexpectedStatusCodeError,
    is_error,
)

BASE_URL = "https://api.example.com"


@responses_lib.activate
def test_get_json():
    responses_lib.add(responses_lib.GET, f"{BASE_URL}/users/1", json={"id": 1, "name": "John"})

    with Client("users", base_url=BASE_URL) as client:
        response = client.get("/users/1", request.accept_json())

    assert response.status_code == 200
    assert response.json() == {"id": 1, "name": "John"}
    assert response.headers["Content-Length"] == str(len(response.content))
    assert responses_lib.calls[0].request.headers["Accept"] == "application/json"


@responses_lib.activate
def test_post_json_body():
    responses_lib.add(responses_lib.POST, f"{BASE_URL}/users", json={"id": 2}, status=201)
    client = Client("users", base_url=BASE_URL)

    response = client.post(
        "/users",
        request.json_body({"name": "Jane"}),
        request.accept_status(201),
    )

    sent = responses_lib.calls[0].request
    assert unmarshal_json(response) == {"id": 2}
    assert sent.body == b'{"name": "Jane"}'
    assert sent.headers["Content-Type"] == "application/json"


@responses_lib.activate
def test_directive_headers_not_sent():
    """Зарезервированные заголовки не уходят в сеть."""
    responses_lib.add(responses_lib.GET, f"{BASE_URL}/data", body="ok")
    client = Client("test", base_url=BASE_URL)

    client.get(
        "/data",
        request.max_retries(2),
        request.accept_status(404),
        request.response_body_required(),
    )

    sent_headers = responses_lib.calls[0].request.headers
    for key in RESERVED_HEADERS:
        assert key not in sent_headers


@responses_lib.activate
def test_query_options():
    responses_lib.add(responses_lib.GET, f"{BASE_URL}/search", json=[])
    client = Client("test", base_url=BASE_URL)

    client.get("/search", request.query({"q": "books", "page": 2}))

    assert responses_lib.calls[0].request.url == f"{BASE_URL}/search?q=books&page=2"


@responses_lib.activate
def test_unexpected_status_not_retried():
    """Статус 500 - не ошибка транспорта, повтора нет."""
    responses_lib.add(responses_lib.GET, f"{BASE_URL}/data", status=500, body="oops")
    client = Client("test", base_url=BASE_URL, max_retries=3)

    with pytest.raises(UnexpectedStatusCodeError) as exc_info:
        client.get("/data")

    assert len(responses_lib.calls) == 1
    assert exc_info.value.response.text == "oops"


@responses_lib.activate
def test_connection_errors_retried():
    # 2 fail, 1 success
    error = requests.ConnectionError("connection refused")
    responses_lib.add(responses_lib.GET, f"{BASE_URL}/data", body=error)
    responses_lib.add(responses_lib.GET, f"{BASE_URL}/data", body=error)
    responses_lib.add(responses_lib.GET, f"{BASE_URL}/data", json={"ok": True})
    client = Client("test", base_url=BASE_URL, max_retries=2)

    response = client.get("/data")

    assert response.json() == {"ok": True}
    assert len(responses_lib.calls) == 3


@responses_lib.activate
def test_retries_exhausted():
    for _ in range(3):
        responses_lib.add(
            responses_lib.GET, f"{BASE_URL}/data", body=requests.ConnectionError("down")
        )
    client = Client("test", base_url=BASE_URL, max_retries=1)

    with pytest.raises(MaxRetriesExceededError) as exc_info:
        client.get("/data")

    assert exc_info.value.attempts == 2
    assert len(responses_lib.calls) == 2
    assert is_error(exc_info.value, requests.ConnectionError)


@responses_lib.activate
def test_no_retries():
    responses_lib.add(
        responses_lib.GET, f"{BASE_URL}/data", body=requests.Timeout("read timed out")
    )
    client = Client("test", base_url=BASE_URL)

    with pytest.raises(TransportError) as exc_info:
        client.get("/data")

    assert not isinstance(exc_info.value, MaxRetriesExceededError)
    assert is_error(exc_info.value, requests.Timeout)


@responses_lib.activate
def test_stream_response():
    responses_lib.add(responses_lib.GET, f"{BASE_URL}/export", body=b"a" * 1024)
    client = Client("test", base_url=BASE_URL)

    response = client.get("/export", request.stream_response())

    chunks = list(response.iter_content(chunk_size=256))
    response.close()
    assert b"".join(chunks) == b"a" * 1024
