"""Тела ответов: пустое тело и материализация в память."""

import io

import requests


class NoBody:
    """
    Пустое тело: read() всегда возвращает b"", close() ничего не делает.

    Используется как единственный экземпляр NO_BODY, поэтому код может
    проверять ``response.raw is NO_BODY``, а не только пустоту.
    """

    closed = False

    def read(self, amt=None) -> bytes:
        return b""

    def readable(self) -> bool:
        return True

    def close(self) -> None:
        pass

    def __iter__(self):
        return iter(())

    def __repr__(self) -> str:
        return "NO_BODY"


NO_BODY = NoBody()

# ошибки чтения живого потока ответа
BODY_READ_ERRORS = (requests.exceptions.RequestException, OSError, ValueError, RuntimeError)


def read_body(response: requests.Response) -> bytes:
    """
    Прочитать тело ответа полностью и закрыть исходный поток.

    Raises:
        любая из BODY_READ_ERRORS
    """
    try:
        return response.content or b""
    finally:
        response.close()


def replace_body(response: requests.Response, body: bytes) -> requests.Response:
    """
    Заменить тело ответа перечитываемым буфером в памяти.

    Content-Length выставляется по длине body; пустое тело - NO_BODY.
    """
    response._content = body
    response._content_consumed = True
    response.raw = io.BytesIO(body) if body else NO_BODY
    response.headers["Content-Length"] = str(len(body))
    return response
