"""Опции запроса: заголовки и авторизация."""

from typing import Callable

import requests

from ..utils.urls import canonical_header_key


def add_header(request: requests.PreparedRequest, key: str, value: str) -> None:
    """Добавить значение к заголовку (несколько значений через ", ")."""
    existing = request.headers.get(key)
    request.headers[key] = value if existing is None else f"{existing}, {value}"


def header(key: str, value: str):
    """
    Установить канонический заголовок (ключ нормализуется).

    Example:
        >>> header("content-type", "application/json")  # -> Content-Type
    """
    def option(request: requests.PreparedRequest) -> None:
        request.headers[canonical_header_key(key)] = value
    return option


def non_canonical_header(key: str, value: str):
    """
    Установить заголовок без нормализации ключа (регистр сохраняется как есть).

    Example:
        >>> non_canonical_header("sessionid", session_id)
    """
    def option(request: requests.PreparedRequest) -> None:
        request.headers[key] = value
    return option


def content_type(value: str):
    """Установить Content-Type."""
    return header("Content-Type", value)


def accept(value: str):
    """Добавить значение в Accept."""
    def option(request: requests.PreparedRequest) -> None:
        add_header(request, "Accept", value)
    return option


def accept_json():
    """Добавить application/json в Accept."""
    return accept("application/json")


def bearer_token(token_source: Callable[[], str]):
    """
    Добавить Authorization: Bearer <token>.

    Токен получается вызовом token_source() в момент применения опции;
    исключение из token_source прерывает создание запроса.
    """
    def option(request: requests.PreparedRequest) -> None:
        token = token_source()
        add_header(request, "Authorization", f"Bearer {token}")
    return option
