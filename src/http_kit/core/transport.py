"""
Транспорт - единственная операция "отправить готовый запрос".

Client никогда не зависит от деталей транспорта (пул соединений, TLS,
версия HTTP). Любой объект с методом send() подходит:

- requests.Session (используется по умолчанию)
- requests.adapters.HTTPAdapter
- http_kit.testing.MockClient
"""

from typing import Any, Callable, Optional, Protocol, runtime_checkable

import requests


@runtime_checkable
class Transport(Protocol):
    """Отправляет подготовленный запрос и возвращает ответ (или выбрасывает исключение)."""

    def send(self, request: requests.PreparedRequest, **kwargs: Any) -> requests.Response:
        ...


TransportWrapper = Callable[[Transport], Transport]


def wrap_transport(transport: Transport, *wrappers: Optional[TransportWrapper]) -> Transport:
    """
    Обернуть транспорт декораторами по порядку (None пропускаются).

    Example:
        >>> wrapped = wrap_transport(mock, RecordingTransport, None)
    """
    for wrapper in wrappers:
        if wrapper is None:
            continue
        transport = wrapper(transport)
    return transport
