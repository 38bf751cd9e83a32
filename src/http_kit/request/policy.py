"""
Опции запроса, задающие политику выполнения.

Значения записываются в зарезервированные заголовки и разбираются
Client.send() перед отправкой (см. core.directives).
"""

import requests

from ..core.config import DEFAULT_ACCEPT_STATUS
from ..core.directives import (
    ACCEPT_STATUS_HEADER,
    MAX_RETRIES_HEADER,
    RESPONSE_BODY_REQUIRED_HEADER,
    STREAM_RESPONSE_HEADER,
    decode_accept_status,
    encode_accept_status,
)


def max_retries(n: int):
    """
    Максимум повторов для этого запроса (перекрывает значение клиента).

    Например, клиент с max_retries=5 и запрос с max_retries(3): не более
    4 попыток - первая и до 3 повторов.

    Raises:
        ValueError: n не целое неотрицательное (при применении опции)
    """
    def option(request: requests.PreparedRequest) -> None:
        if isinstance(n, bool) or not isinstance(n, int) or n < 0:
            raise ValueError(f"max_retries must be a non-negative integer, got {n!r}")
        request.headers[MAX_RETRIES_HEADER] = str(n)
    return option


def accept_status(*status_codes: int):
    """
    Дополнительные допустимые статус коды ответа.

    Повторное применение накапливает коды; 200 допустим всегда.

    Example:
        >>> client.get("/users/1", accept_status(404))

    Raises:
        InvalidJSONError: существующее значение заголовка повреждено
    """
    def option(request: requests.PreparedRequest) -> None:
        codes = list(DEFAULT_ACCEPT_STATUS)
        existing = request.headers.get(ACCEPT_STATUS_HEADER)
        if existing is not None:
            codes = decode_accept_status(existing)
        codes.extend(status_codes)
        request.headers[ACCEPT_STATUS_HEADER] = encode_accept_status(codes)
    return option


def response_body_required():
    """Пустое тело ответа - ошибка NoResponseBodyError."""
    def option(request: requests.PreparedRequest) -> None:
        request.headers[RESPONSE_BODY_REQUIRED_HEADER] = "true"
    return option


def stream_response():
    """Не читать тело ответа: вызывающий код читает и закрывает поток сам."""
    def option(request: requests.PreparedRequest) -> None:
        request.headers[STREAM_RESPONSE_HEADER] = "true"
    return option
