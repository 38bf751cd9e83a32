"""
Директивы выполнения, передаваемые через зарезервированные заголовки.

Опции запроса (http_kit.request.max_retries, accept_status, ...) записывают
политику выполнения в заголовки запроса. Client.send() разбирает их в
ExecutionDirectives и удаляет из запроса до отправки транспорту, поэтому
зарезервированные заголовки никогда не уходят в сеть.
"""

import json
import logging
import re
from typing import Iterable, List, Optional, Tuple

import requests

from .config import ExecutionDirectives
from .exceptions import InvalidDirectiveError, InvalidJSONError

logger = logging.getLogger(__name__)

MAX_RETRIES_HEADER = "X-Http-Kit-Max-Retries"
ACCEPT_STATUS_HEADER = "X-Http-Kit-Accept-Status"
RESPONSE_BODY_REQUIRED_HEADER = "X-Http-Kit-Response-Body-Required"
STREAM_RESPONSE_HEADER = "X-Http-Kit-Stream-Response"

RESERVED_HEADERS: Tuple[str, ...] = (
    MAX_RETRIES_HEADER,
    ACCEPT_STATUS_HEADER,
    RESPONSE_BODY_REQUIRED_HEADER,
    STREAM_RESPONSE_HEADER,
)

_UINT = re.compile(r"[0-9]+")


def encode_accept_status(status_codes: Iterable[int]) -> str:
    """Закодировать статус коды в значение заголовка (JSON массив)."""
    return json.dumps([int(code) for code in status_codes], separators=(",", ":"))


def decode_accept_status(value: str) -> List[int]:
    """
    Разобрать значение заголовка accept-status.

    Raises:
        InvalidJSONError: значение не JSON массив целых чисел
    """
    try:
        codes = json.loads(value)
    except ValueError as e:
        raise InvalidJSONError(f"invalid json: {e}") from e

    if not isinstance(codes, list):
        raise InvalidJSONError(f"invalid json: expected array of integers, got {value!r}")
    for code in codes:
        if isinstance(code, bool) or not isinstance(code, int) or code < 0:
            raise InvalidJSONError(f"invalid json: expected array of integers, got {value!r}")
    return codes


def parse_max_retries(value: str) -> int:
    """
    Разобрать значение заголовка max-retries (десятичное целое без знака).

    Raises:
        ValueError: значение не целое неотрицательное число
    """
    if not _UINT.fullmatch(value):
        raise ValueError(f"invalid syntax: {value!r}")
    return int(value)


def strip_directives(request: requests.PreparedRequest) -> dict:
    """Удалить зарезервированные заголовки из запроса, вернуть их значения."""
    found = {}
    if request.headers is None:
        return found
    for key in RESERVED_HEADERS:
        value = request.headers.pop(key, None)
        if value is not None:
            found[key] = value
    return found


def parse_directives(
    request: requests.PreparedRequest,
    defaults: Optional[ExecutionDirectives] = None,
) -> ExecutionDirectives:
    """
    Разобрать директивы выполнения из заголовков запроса.

    Заголовки удаляются в любом случае - и при успехе, и при ошибке.
    Отсутствующая директива берется из defaults. Статус коды из заголовка
    добавляются к defaults.accept_status (объединение, порядок сохраняется).

    Args:
        request: Запрос
        defaults: Политика по умолчанию (клиента или явно переданная)

    Returns:
        ExecutionDirectives

    Raises:
        InvalidDirectiveError: директива присутствует, но невалидна
    """
    defaults = defaults or ExecutionDirectives()
    raw = strip_directives(request)

    max_retries = defaults.max_retries
    if MAX_RETRIES_HEADER in raw:
        try:
            max_retries = parse_max_retries(raw[MAX_RETRIES_HEADER])
        except ValueError as e:
            raise InvalidDirectiveError(MAX_RETRIES_HEADER, e) from e

    codes: List[int] = []
    if ACCEPT_STATUS_HEADER in raw:
        try:
            codes = decode_accept_status(raw[ACCEPT_STATUS_HEADER])
        except InvalidJSONError as e:
            raise InvalidDirectiveError(ACCEPT_STATUS_HEADER, e) from e

    body_required = defaults.response_body_required
    if RESPONSE_BODY_REQUIRED_HEADER in raw:
        body_required = raw[RESPONSE_BODY_REQUIRED_HEADER] == "true"

    stream = defaults.stream_response
    if STREAM_RESPONSE_HEADER in raw:
        stream = raw[STREAM_RESPONSE_HEADER] == "true"

    directives = ExecutionDirectives(
        max_retries=max_retries,
        accept_status=defaults.accept_status,
        response_body_required=body_required,
        stream_response=stream,
    ).accepting(codes)
    if raw:
        logger.debug("Parsed request directives", extra={"directives": directives})
    return directives
