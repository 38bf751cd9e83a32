"""
JSON тела запросов и ответов.

Различает два вида ошибок ответа:
- ResponseBodyReadError - тело не удалось прочитать
- InvalidJSONError - тело прочитано, но это не JSON
"""

import json
from typing import Any

import requests

from ..core.body import BODY_READ_ERRORS, read_body
from ..core.exceptions import InvalidJSONError, MarshallingJSONError, ResponseBodyReadError


def marshal_json(value: Any) -> bytes:
    """
    Сериализовать значение в JSON (UTF-8).

    Raises:
        MarshallingJSONError: значение не сериализуется
    """
    try:
        return json.dumps(value).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise MarshallingJSONError(f"error marshalling json: {e}") from e


def unmarshal_json(response: requests.Response) -> Any:
    """
    Прочитать тело ответа и разобрать как JSON.

    Поток ответа закрывается в любом случае.

    Example:
        >>> data = unmarshal_json(client.get("/users/1"))
        >>> data["name"]
        'John'

    Raises:
        ResponseBodyReadError: ошибка чтения тела
        InvalidJSONError: тело не JSON
    """
    url = getattr(response, 'url', None)
    try:
        body = read_body(response)
    except BODY_READ_ERRORS as e:
        raise ResponseBodyReadError(e, url=url, response=response) from e

    try:
        return json.loads(body)
    except ValueError as e:
        raise InvalidJSONError(f"invalid json: {e}", url=url, response=response) from e
