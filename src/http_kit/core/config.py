"""
Система конфигурации для http-kit.

Все конфиги immutable (frozen dataclasses) для потокобезопасности.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple, TYPE_CHECKING
from urllib.parse import urlsplit

from .exceptions import InvalidURLError

if TYPE_CHECKING:
    from .logging import LoggingConfig

DEFAULT_ACCEPT_STATUS: Tuple[int, ...] = (200,)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# TIMEOUT CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class TimeoutConfig:
    """
    Конфигурация таймаутов (передаются транспорту с каждой попыткой).

    Args:
        connect: Таймаут подключения (сек)
        read: Таймаут чтения данных (сек)

    Examples:
        >>> TimeoutConfig(connect=5, read=30)
    """
    connect: float = 5
    read: float = 30

    def __post_init__(self):
        """Валидация."""
        if self.connect <= 0:
            raise ValueError("connect timeout must be positive")
        if self.read <= 0:
            raise ValueError("read timeout must be positive")

    def as_tuple(self) -> Tuple[float, float]:
        """Вернуть как (connect, read) для requests."""
        return (self.connect, self.read)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# EXECUTION DIRECTIVES
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class ExecutionDirectives:
    """
    Политика выполнения одного запроса.

    Args:
        max_retries: Максимум повторов после первой попытки
        accept_status: Допустимые статус коды ответа
        response_body_required: Пустое тело ответа - ошибка
        stream_response: Не читать тело ответа, вернуть живой поток

    Examples:
        >>> ExecutionDirectives(max_retries=2, accept_status=(200, 404))
    """
    max_retries: int = 0
    accept_status: Tuple[int, ...] = DEFAULT_ACCEPT_STATUS
    response_body_required: bool = False
    stream_response: bool = False

    def __post_init__(self):
        """Валидация."""
        if isinstance(self.max_retries, bool) or not isinstance(self.max_retries, int):
            raise ValueError("max_retries must be an integer")
        if self.max_retries < 0:
            raise ValueError("max_retries must be non-negative")
        codes = tuple(self.accept_status)
        for code in codes:
            if isinstance(code, bool) or not isinstance(code, int):
                raise ValueError(f"accept_status must contain integers, got {code!r}")
        object.__setattr__(self, 'accept_status', codes)

    def accepts(self, status_code: int) -> bool:
        """Проверить, допустим ли статус код."""
        return status_code in self.accept_status

    def accepting(self, status_codes: Iterable[int]) -> "ExecutionDirectives":
        """Вернуть копию с дополнительными статус кодами (накопление, не замена, без дублей)."""
        merged = list(self.accept_status)
        for code in status_codes:
            if code not in merged:
                merged.append(code)
        return ExecutionDirectives(
            max_retries=self.max_retries,
            accept_status=tuple(merged),
            response_body_required=self.response_body_required,
            stream_response=self.stream_response,
        )

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# MAIN CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def _freeze_dict(d: Optional[Dict[str, str]]) -> Mapping[str, str]:
    """Convert dict to immutable MappingProxyType."""
    if d is None:
        return MappingProxyType({})
    return MappingProxyType(dict(d))


def validate_base_url(url: str) -> str:
    """
    Проверить, что base URL абсолютный (есть схема).

    Raises:
        InvalidURLError: URL не разбирается или не абсолютный
    """
    if not isinstance(url, str):
        raise InvalidURLError("base url must be a string")
    try:
        parts = urlsplit(url)
        parts.port  # валидация порта
    except ValueError as e:
        raise InvalidURLError(f"invalid url {url!r}: {e}") from e
    if not parts.scheme:
        raise InvalidURLError(f"invalid url {url!r}: URL must be absolute")
    return url


@dataclass(frozen=True)
class ClientConfig:
    """
    Главная конфигурация Client.

    Args:
        base_url: Базовый URL, к которому добавляется path каждого запроса
        max_retries: Повторы по умолчанию (запрос может переопределить)
        timeout: Таймауты транспорта
        headers: Заголовки, добавляемые к каждому новому запросу
        logging: Конфигурация логирования (опционально)

    Examples:
        >>> ClientConfig.create(base_url="https://api.example.com", max_retries=2)
    """
    base_url: Optional[str] = None
    max_retries: int = 0
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)
    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    logging: Optional['LoggingConfig'] = None

    def __post_init__(self):
        """Валидация."""
        if self.base_url is not None:
            validate_base_url(self.base_url)
        if isinstance(self.max_retries, bool) or not isinstance(self.max_retries, int):
            raise ValueError("max_retries must be an integer")
        if self.max_retries < 0:
            raise ValueError("max_retries must be non-negative")
        if not isinstance(self.timeout, TimeoutConfig):
            raise ValueError("timeout must be a TimeoutConfig")
        if not isinstance(self.headers, MappingProxyType):
            object.__setattr__(self, 'headers', _freeze_dict(self.headers))

    @classmethod
    def create(
        cls,
        base_url: Optional[str] = None,
        max_retries: int = 0,
        timeout: Optional[float] = None,
        connect_timeout: Optional[float] = None,
        headers: Optional[Dict[str, str]] = None,
        logging: Optional['LoggingConfig'] = None,
    ) -> "ClientConfig":
        """
        Создать конфиг из простых параметров.

        Args:
            base_url: Базовый URL
            max_retries: Повторы по умолчанию
            timeout: Таймаут чтения (сек)
            connect_timeout: Таймаут подключения (сек)
            headers: Заголовки по умолчанию
            logging: Конфигурация логирования
        """
        defaults = TimeoutConfig()
        timeout_config = TimeoutConfig(
            connect=connect_timeout if connect_timeout is not None else defaults.connect,
            read=timeout if timeout is not None else defaults.read,
        )
        return cls(
            base_url=base_url,
            max_retries=max_retries,
            timeout=timeout_config,
            headers=_freeze_dict(headers),
            logging=logging,
        )

    def default_directives(self) -> ExecutionDirectives:
        """Политика выполнения, если запрос не задает свою."""
        return ExecutionDirectives(max_retries=self.max_retries)
