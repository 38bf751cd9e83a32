# src/http_kit/core/client.py
import dataclasses
import logging
from typing import Any, Callable, Optional

import requests

from .body import BODY_READ_ERRORS, read_body, replace_body
from .config import ClientConfig, ExecutionDirectives, TimeoutConfig
from .directives import parse_directives
from .exceptions import (
    ClientInitialisationError,
    HTTPClientException,
    InvalidDirectiveError,
    InvalidURLError,
    MaxRetriesExceededError,
    NoResponseBodyError,
    RequestInitialisationError,
    RequestOptionError,
    ResponseBodyReadError,
    TransportError,
    UnexpectedStatusCodeError,
)
from .logging import configure_logging
from .transport import Transport
from ..utils.urls import join_url, mask_url

logger = logging.getLogger(__name__)

RequestOption = Callable[[requests.PreparedRequest], None]


class Client:
    """
    HTTP клиент-декоратор над произвольным транспортом.

    Features:
        - Повторы при ошибках транспорта (без задержки между попытками)
        - Проверка статуса ответа по списку допустимых кодов
        - Материализация тела ответа в память (или живой поток по запросу)
        - Политика выполнения per-request через опции запроса
        - Immutable после создания
    """

    def __init__(
        self,
        name: str,
        base_url: Optional[str] = None,
        transport: Optional[Transport] = None,
        config: Optional[ClientConfig] = None,
        **kwargs: Any
    ):
        """
        Initialize client.

        Args:
            name: Имя клиента (попадает в сообщения об ошибках и логи)
            base_url: Базовый URL (перекрывает config.base_url)
            transport: Транспорт (по умолчанию requests.Session)
            config: ClientConfig
            **kwargs: Параметры ClientConfig.create() (max_retries, timeout, headers, ...)

        Raises:
            ClientInitialisationError: конфигурация невалидна
        """
        try:
            if config is None:
                config = ClientConfig.create(base_url=base_url, **kwargs)
            else:
                overrides = dict(kwargs)
                read = overrides.pop('timeout', None)
                connect = overrides.pop('connect_timeout', None)
                if read is not None or connect is not None:
                    overrides['timeout'] = TimeoutConfig(
                        connect=connect if connect is not None else config.timeout.connect,
                        read=read if read is not None else config.timeout.read,
                    )
                if base_url is not None:
                    overrides['base_url'] = base_url
                if overrides:
                    config = dataclasses.replace(config, **overrides)
        except (HTTPClientException, ValueError, TypeError) as e:
            raise ClientInitialisationError(
                f"error initialising client: {e}", client=name
            ) from e

        owns_transport = transport is None
        if transport is None:
            transport = requests.Session()

        # Immutable fields
        object.__setattr__(self, '_name', name)
        object.__setattr__(self, '_config', config)
        object.__setattr__(self, '_transport', transport)
        object.__setattr__(self, '_owns_transport', owns_transport)

        if config.logging:
            configure_logging(config.logging)

        object.__setattr__(self, '_initialized', True)

    def __setattr__(self, name, value):
        """Запретить изменение после init (immutability)."""
        if hasattr(self, '_initialized'):
            raise RuntimeError(
                f"Cannot modify '{name}' - Client is immutable. "
                f"Create new instance instead."
            )
        object.__setattr__(self, name, value)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def __repr__(self) -> str:
        return f"Client(name={self._name!r}, base_url={self._config.base_url!r})"

    def close(self):
        """Закрыть транспорт, если он был создан клиентом."""
        if self._owns_transport:
            self._transport.close()

    # ==================== Запросы ====================

    def new_request(
        self,
        method: str,
        path: str,
        *options: RequestOption
    ) -> requests.PreparedRequest:
        """
        Создать запрос: path добавляется к base_url, затем применяются опции.

        Query string задается ТОЛЬКО опциями (request.query, request.raw_query):
        "?" в path экранируется и становится частью пути.

        Example:
            >>> rq = client.new_request("GET", "/path", request.raw_query("q=1"))
            >>> rq.url
            'https://api.example.com/path?q=1'

        Raises:
            InvalidURLError: base_url и path не склеиваются в URL
            RequestInitialisationError: запрос не может быть подготовлен
            RequestOptionError: одна из опций завершилась с ошибкой
        """
        try:
            url = join_url(self._config.base_url or "", path)
        except InvalidURLError as e:
            raise e.with_context(self._name, method, path)

        try:
            request = requests.Request(
                method=method,
                url=url,
                headers=dict(self._config.headers),
            ).prepare()
        except (requests.exceptions.RequestException, ValueError) as e:
            raise RequestInitialisationError(
                f"error initialising request: {e}",
                client=self._name, method=method, url=url
            ) from e

        for position, option in enumerate(options, start=1):
            try:
                option(request)
            except Exception as e:
                raise RequestOptionError(
                    position, e,
                    client=self._name, method=request.method, url=url
                ) from e

        return request

    def send(
        self,
        request: requests.PreparedRequest,
        directives: Optional[ExecutionDirectives] = None,
        **send_kwargs: Any
    ) -> requests.Response:
        """
        Отправить запрос через транспорт и обработать ответ.

        1. Директивы разбираются из зарезервированных заголовков (и удаляются)
        2. Ошибки транспорта повторяются до max_retries раз
        3. Статус ответа проверяется по accept_status
        4. Тело читается в память (если не запрошен stream)

        Args:
            request: Подготовленный запрос
            directives: Политика по умолчанию вместо политики клиента
            **send_kwargs: Дополнительные параметры транспорта (timeout, verify, ...)

        Returns:
            Ответ с материализованным телом (или живым потоком)

        Raises:
            InvalidDirectiveError: невалидная директива в заголовках
            TransportError: ошибка транспорта (retries не настроены)
            MaxRetriesExceededError: все попытки исчерпаны
            UnexpectedStatusCodeError: статус не допустим (response доступен)
            ResponseBodyReadError: ошибка чтения тела
            NoResponseBodyError: тело пустое, но обязательно
        """
        method, url = request.method, request.url
        context = {'client': self._name, 'method': method, 'url': url}
        log_extra = {'client': self._name, 'method': method, 'url': mask_url(url)}

        try:
            policy = parse_directives(request, directives or self._config.default_directives())
        except InvalidDirectiveError as e:
            logger.error("Invalid request directive", extra={**log_extra, 'error': str(e.error)})
            raise e.with_context(self._name, method, url)

        send_kwargs.setdefault('timeout', self._config.timeout.as_tuple())
        send_kwargs['stream'] = True

        logger.debug(
            "Request started",
            extra={**log_extra, 'max_retries': policy.max_retries, 'stream': policy.stream_response}
        )

        response = self._submit(request, policy, send_kwargs, context, log_extra)

        if not policy.accepts(response.status_code):
            logger.warning(
                "Unexpected status code",
                extra={**log_extra, 'status_code': response.status_code,
                       'accept_status': list(policy.accept_status)}
            )
            raise UnexpectedStatusCodeError(response, **context)

        if policy.stream_response:
            return response

        try:
            body = read_body(response)
        except BODY_READ_ERRORS as e:
            replace_body(response, b"")
            logger.error("Error reading response body", extra={**log_extra, 'error': str(e)})
            raise ResponseBodyReadError(e, response=response, **context) from e

        replace_body(response, body)

        if not body and policy.response_body_required:
            raise NoResponseBodyError(response, **context)

        logger.debug(
            "Request completed",
            extra={**log_extra, 'status_code': response.status_code, 'response_size': len(body)}
        )
        return response

    def _submit(self, request, policy, send_kwargs, context, log_extra) -> requests.Response:
        """Retry loop: каждая ошибка транспорта повторяется, пока есть попытки."""
        remaining = policy.max_retries
        attempt = 0
        while True:
            attempt += 1
            try:
                return self._transport.send(request, **send_kwargs)
            except Exception as e:
                # no retries were configured
                if policy.max_retries == 0:
                    logger.error(
                        "Request failed",
                        extra={**log_extra, 'error': str(e), 'error_type': type(e).__name__}
                    )
                    raise TransportError(e, **context) from e

                # retries were configured but have been exhausted
                if remaining == 0:
                    logger.error(
                        "Request failed",
                        extra={**log_extra, 'error': str(e), 'error_type': type(e).__name__,
                               'attempt': attempt, 'is_max_attempts': True}
                    )
                    raise MaxRetriesExceededError(attempt, e, **context) from e

                remaining -= 1
                logger.warning(
                    "Request error (will retry)",
                    extra={**log_extra, 'error': str(e), 'error_type': type(e).__name__,
                           'attempt': attempt, 'max_attempts': policy.max_retries + 1}
                )

    # ==================== Convenience методы ====================

    def request(
        self,
        method: str,
        path: str,
        *options: RequestOption,
        **send_kwargs: Any
    ) -> requests.Response:
        """Создать и отправить запрос."""
        return self.send(self.new_request(method, path, *options), **send_kwargs)

    def get(self, path: str, *options: RequestOption, **send_kwargs: Any) -> requests.Response:
        """Выполняет GET запрос."""
        return self.request("GET", path, *options, **send_kwargs)

    def post(self, path: str, *options: RequestOption, **send_kwargs: Any) -> requests.Response:
        """Выполняет POST запрос."""
        return self.request("POST", path, *options, **send_kwargs)

    def put(self, path: str, *options: RequestOption, **send_kwargs: Any) -> requests.Response:
        """Выполняет PUT запрос."""
        return self.request("PUT", path, *options, **send_kwargs)

    def patch(self, path: str, *options: RequestOption, **send_kwargs: Any) -> requests.Response:
        """Выполняет PATCH запрос."""
        return self.request("PATCH", path, *options, **send_kwargs)

    def delete(self, path: str, *options: RequestOption, **send_kwargs: Any) -> requests.Response:
        """Выполняет DELETE запрос."""
        return self.request("DELETE", path, *options, **send_kwargs)

    # ==================== Свойства ====================

    @property
    def name(self) -> str:
        """Имя клиента (read-only)."""
        return self._name

    @property
    def base_url(self) -> Optional[str]:
        """Base URL (read-only)."""
        return self._config.base_url

    @property
    def max_retries(self) -> int:
        """Повторы по умолчанию (read-only)."""
        return self._config.max_retries

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def transport(self) -> Transport:
        return self._transport
