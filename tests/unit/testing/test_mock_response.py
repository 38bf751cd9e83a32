"""Тесты MockResponse builder."""

from http_kit.testing import MockResponse


def test_defaults():
    response = MockResponse()

    assert response.body == b""
    assert response.headers == {}
    assert response.status_code is None
    assert response.error is None


def test_with_body_str():
    assert MockResponse().with_body("тело").body == "тело".encode("utf-8")


def test_with_json():
    assert MockResponse().with_json({"id": 1}).body == b'{"id": 1}'


def test_with_json_failure_becomes_body():
    """Ошибка сериализации не выбрасывается, а становится телом ответа."""
    response = MockResponse().with_json({"bad": object()})

    assert response.body.startswith(b"with_json: error marshalling json")
    assert response.status_code is None


def test_headers():
    response = MockResponse() \
        .with_header("content-type", "text/plain") \
        .with_non_canonical_header("x-raw", "1")

    assert response.headers == {"Content-Type": "text/plain", "x-raw": "1"}


def test_with_multipart():
    response = MockResponse().with_multipart_form_data_from_map({"a": "b"}, boundary="XYZ")

    assert response.headers["Content-Type"] == "multipart/form-data; boundary=XYZ"
    assert response.body.startswith(b"--XYZ\r\n")
    assert response.status_code is None


def test_with_multipart_failure():
    """Ошибка кодирования - ответ 500 с текстом ошибки."""
    response = MockResponse().with_multipart_form_data_from_map({"a": "b"}, boundary="")

    assert response.status_code == 500
    assert response.body.startswith(
        b"MockResponse: with_multipart_form_data_from_map: multipart.body_from_map: invalid boundary"
    )
    assert "Content-Type" not in response.headers
