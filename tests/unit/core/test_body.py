"""Тесты материализации тела ответа."""

import io

import requests

from http_kit.core.body import NO_BODY, read_body, replace_body


def live_response(body):
    response = requests.Response()
    response.status_code = 200
    response.raw = io.BytesIO(body)
    return response


def test_no_body_reads_empty():
    assert NO_BODY.read() == b""
    assert NO_BODY.read(10) == b""
    assert list(NO_BODY) == []
    NO_BODY.close()
    assert repr(NO_BODY) == "NO_BODY"


def test_read_body():
    response = live_response(b"payload")

    assert read_body(response) == b"payload"


def test_replace_body():
    """Тело доступно повторно: content, text, raw.read()."""
    response = live_response(b"original")

    replace_body(response, b"replaced")

    assert response.content == b"replaced"
    assert response.text == "replaced"
    assert response.raw.read() == b"replaced"
    assert response.headers["Content-Length"] == "8"


def test_replace_with_empty_body():
    response = live_response(b"original")

    replace_body(response, b"")

    assert response.raw is NO_BODY
    assert response.content == b""
    assert response.headers["Content-Length"] == "0"
