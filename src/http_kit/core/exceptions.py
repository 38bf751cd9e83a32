"""
Иерархия исключений http-kit.

Классификация:
- ConfigurationError - ошибки конфигурации клиента (при создании)
- ошибки подготовки запроса (опции, директивы)
- TransportError - ошибки отправки запроса (всегда ретраятся)
- ошибки обработки ответа (статус, тело)
- ошибки mock клиента (testing)

Каждое исключение, выброшенное из Client.send(), несет контекст:
имя клиента, HTTP метод и URL запроса.
"""

from typing import Any, List, Optional, Type

import requests

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# BASE
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class HTTPClientException(Exception):
    """
    Базовое исключение http-kit.

    Args:
        message: Сообщение об ошибке
        client: Имя клиента
        method: HTTP метод запроса
        url: URL запроса
        response: Ответ (если был получен)
    """

    def __init__(
        self,
        message: str,
        client: Optional[str] = None,
        method: Optional[str] = None,
        url: Optional[str] = None,
        response: Optional[requests.Response] = None,
    ):
        self.message = message
        self.client = client
        self.method = method
        self.url = url
        self.response = response
        super().__init__(self._format())

    def _format(self) -> str:
        prefix = []
        if self.client:
            prefix.append(self.client)
        if self.method or self.url:
            prefix.append(" ".join(p for p in (self.method, self.url) if p))
        if prefix:
            return f"{': '.join(prefix)}: {self.message}"
        return self.message

    def with_context(
        self,
        client: Optional[str],
        method: Optional[str],
        url: Optional[str],
    ) -> "HTTPClientException":
        """Добавить контекст клиента/запроса (не перезаписывает уже заданный)."""
        self.client = self.client or client
        self.method = self.method or method
        self.url = self.url or url
        self.args = (self._format(),)
        return self

    def __str__(self) -> str:
        return self._format()

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# КОНФИГУРАЦИЯ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class ConfigurationError(HTTPClientException):
    """Ошибка конфигурации."""
    pass

class InvalidURLError(ConfigurationError, ValueError):
    """Невалидный URL (base URL клиента или результат join с path)."""
    pass

class ClientInitialisationError(ConfigurationError):
    """
    Клиент не может быть создан.

    Оригинальная ошибка конфигурации доступна через __cause__.
    """
    pass

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ПОДГОТОВКА ЗАПРОСА
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class RequestInitialisationError(HTTPClientException):
    """Запрос не может быть создан."""
    pass

class RequestOptionError(RequestInitialisationError):
    """
    Опция запроса завершилась с ошибкой.

    Args:
        position: Позиция опции (начиная с 1)
        error: Исходная ошибка
    """

    def __init__(self, position: int, error: Exception, **kwargs):
        self.position = position
        self.error = error
        super().__init__(f"request option #{position}: {error}", **kwargs)

class InvalidJSONError(HTTPClientException, ValueError):
    """Невалидный JSON (в директиве или в теле ответа)."""
    pass

class MarshallingJSONError(HTTPClientException, ValueError):
    """Значение не может быть сериализовано в JSON."""
    pass

class MultipartError(HTTPClientException):
    """Ошибка кодирования/декодирования multipart/form-data."""
    pass

class InvalidDirectiveError(HTTPClientException):
    """
    Директива выполнения в зарезервированном заголовке невалидна.

    Args:
        directive: Имя заголовка директивы
        error: Ошибка разбора значения
    """

    def __init__(self, directive: str, error: Exception, **kwargs):
        self.directive = directive
        self.error = error
        super().__init__(f"invalid request header: {directive}: {error}", **kwargs)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ОТПРАВКА
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class TransportError(HTTPClientException):
    """
    Транспорт не смог отправить запрос.

    Args:
        error: Исключение транспорта
    """

    def __init__(self, error: Exception, **kwargs):
        self.error = error
        kwargs.setdefault("response", getattr(error, "response", None))
        super().__init__(str(error) or type(error).__name__, **kwargs)

class MaxRetriesExceededError(TransportError):
    """
    Исчерпаны все retry попытки.

    Args:
        attempts: Количество выполненных попыток
        last_error: Последняя ошибка транспорта
    """

    def __init__(self, attempts: int, last_error: Exception, **kwargs):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(last_error, **kwargs)
        self.message = f"http retries exceeded ({attempts} attempts): {self.message}"
        self.args = (self._format(),)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ОТВЕТ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class UnexpectedStatusCodeError(HTTPClientException):
    """
    Статус ответа не входит в список допустимых.

    Ответ доступен через атрибут response.
    """

    def __init__(self, response: requests.Response, **kwargs):
        self.status_code = response.status_code
        status = f"{response.status_code} {response.reason or ''}".strip()
        super().__init__(f"unexpected status code: {status}", response=response, **kwargs)

class NoResponseBodyError(HTTPClientException):
    """Тело ответа пустое, хотя было обязательным."""

    def __init__(self, response: Optional[requests.Response] = None, **kwargs):
        super().__init__("response body was empty", response=response, **kwargs)

class ResponseBodyReadError(HTTPClientException):
    """Ошибка чтения тела ответа."""

    def __init__(self, error: Exception, **kwargs):
        self.error = error
        super().__init__(f"error reading response body: {error}", **kwargs)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# MOCK
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class UnexpectedRequestError(HTTPClientException):
    """Mock клиент получил запрос, которого не ожидал."""

    def __init__(self, message: str = "unexpected request", **kwargs):
        super().__init__(message, **kwargs)

class CannotChangeExpectationsError(HTTPClientException, RuntimeError):
    """
    Попытка добавить ожидание после того, как mock уже получил запрос.

    Ошибка использования (баг в тесте), а не провал теста.
    """
    pass

class ResponseSynthesisError(HTTPClientException):
    """Mock не смог сформировать настроенный ответ."""
    pass

class ExpectationsNotMetError(HTTPClientException, AssertionError):
    """
    Одно или несколько ожиданий mock клиента не выполнены.

    Args:
        name: Имя mock клиента
        errors: Все строки отчета (по одной на каждое расхождение)
    """

    def __init__(self, name: str, errors: List[str]):
        self.name = name
        self.errors = list(errors)
        lines = "".join(f"   {e}\n" for e in self.errors)
        super().__init__(f"{name}: expectations not met: [\n{lines}]")

    def _format(self) -> str:
        return self.message

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# УТИЛИТЫ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def is_error(exc: Optional[BaseException], kind: Type[BaseException]) -> bool:
    """
    Проверить, является ли исключение (или любая обернутая им ошибка) kind.

    Проходит по цепочке __cause__, а также по атрибутам error/last_error
    наших исключений.

    Examples:
        >>> try:
        ...     client.send(rq)
        ... except HTTPClientException as e:
        ...     assert is_error(e, UnexpectedRequestError)
    """
    seen = set()
    while exc is not None and id(exc) not in seen:
        if isinstance(exc, kind):
            return True
        seen.add(id(exc))
        nxt: Any = getattr(exc, "last_error", None) or getattr(exc, "error", None)
        if not isinstance(nxt, BaseException):
            nxt = exc.__cause__
        exc = nxt
    return False
