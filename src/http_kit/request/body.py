"""Опции запроса: тело."""

from typing import Any, Mapping, Optional, Union

import requests

from ..utils.json_body import marshal_json
from ..utils.multipart import DEFAULT_BOUNDARY, PartTransform, body_from_map


def _set_body(request: requests.PreparedRequest, data: bytes) -> None:
    request.body = data
    request.headers["Content-Length"] = str(len(data))


def body(data: Union[bytes, bytearray, str]):
    """
    Установить тело запроса (копия данных) и Content-Length.

    Строка кодируется в UTF-8.

    Raises:
        TypeError: data не bytes/str
    """
    def option(request: requests.PreparedRequest) -> None:
        if isinstance(data, str):
            payload = data.encode("utf-8")
        elif isinstance(data, (bytes, bytearray)):
            payload = bytes(data)
        else:
            raise TypeError(f"body must be bytes or str, got {type(data).__name__}")
        _set_body(request, payload)
    return option


def json_body(value: Any):
    """
    Тело - значение, сериализованное в JSON; Content-Type: application/json.

    Raises:
        MarshallingJSONError: значение не сериализуется
    """
    def option(request: requests.PreparedRequest) -> None:
        payload = marshal_json(value)
        _set_body(request, payload)
        request.headers["Content-Type"] = "application/json"
    return option


def multipart_form_data_from_map(
    mapping: Mapping[Any, Any],
    boundary: str = DEFAULT_BOUNDARY,
    transform: Optional[PartTransform] = None,
):
    """
    Тело multipart/form-data из элементов словаря.

    При ошибке тело запроса сбрасывается.

    Raises:
        MultipartError: см. utils.multipart.body_from_map
    """
    def option(request: requests.PreparedRequest) -> None:
        try:
            ct, payload = body_from_map(mapping, boundary=boundary, transform=transform)
        except Exception:
            request.body = None
            raise
        request.headers["Content-Type"] = ct
        _set_body(request, payload)
    return option
