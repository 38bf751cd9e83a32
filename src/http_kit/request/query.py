"""Опции запроса: query string."""

from typing import Any, Mapping
from urllib.parse import quote_plus, urlsplit, urlunsplit

import requests


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _set_query(request: requests.PreparedRequest, query: str) -> None:
    request.url = urlunsplit(urlsplit(request.url)._replace(query=query))


def query_param(key: str, value: Any = None):
    """
    Добавить пару key=value в query string (ключ и значение url-кодируются).

    Если value is None - добавляется только ключ.

    Examples:
        >>> query_param("foo")           # ?foo
        >>> query_param("foo", True)     # ?foo=true
        >>> query_param("'a map'", "key=value")  # ?%27a+map%27=key%3Dvalue
    """
    def option(request: requests.PreparedRequest) -> None:
        item = quote_plus(key)
        if value is not None:
            item += "=" + quote_plus(_format_value(value))
        existing = urlsplit(request.url).query
        _set_query(request, f"{existing}&{item}" if existing else item)
    return option


def query(params: Mapping[str, Any]):
    """
    Добавить все пары словаря в query string (в порядке словаря).

    Example:
        >>> query({"page": 2, "verbose": None})  # ?page=2&verbose
    """
    def option(request: requests.PreparedRequest) -> None:
        for key, value in params.items():
            query_param(key, value)(request)
    return option


def raw_query(value: str):
    """Заменить query string целиком (значение должно быть уже url-кодировано)."""
    def option(request: requests.PreparedRequest) -> None:
        _set_query(request, value)
    return option
