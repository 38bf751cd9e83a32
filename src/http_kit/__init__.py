"""http-kit - HTTP клиент-декоратор над транспортом requests и mock транспорт для тестов."""

import logging
from importlib.metadata import version, PackageNotFoundError

from .core.client import Client, RequestOption
from .core.config import ClientConfig, ExecutionDirectives, TimeoutConfig
from .core.body import NO_BODY
from .core.transport import Transport, TransportWrapper, wrap_transport
from .core.exceptions import (
    HTTPClientException,
    ConfigurationError,
    InvalidURLError,
    ClientInitialisationError,
    RequestInitialisationError,
    RequestOptionError,
    InvalidJSONError,
    MarshallingJSONError,
    MultipartError,
    InvalidDirectiveError,
    TransportError,
    MaxRetriesExceededError,
    UnexpectedStatusCodeError,
    NoResponseBodyError,
    ResponseBodyReadError,
    UnexpectedRequestError,
    CannotChangeExpectationsError,
    ResponseSynthesisError,
    ExpectationsNotMetError,
    is_error,
)
from .core.logging import LoggingConfig, configure_logging
from .utils.json_body import marshal_json, unmarshal_json
from .utils.multipart import body_from_map, map_from_multipart
from . import request

# NullHandler, чтобы не было "No handler found"; настройка - configure_logging()
logging.getLogger('http_kit').addHandler(logging.NullHandler())

# Version info - из метаданных пакета (pyproject.toml)
try:
    __version__ = version("http-client-kit")
except PackageNotFoundError:
    # Package is not installed (development mode)
    __version__ = "0.0.0-dev"

__all__ = [
    # Core
    "Client",
    "RequestOption",
    "Transport",
    "TransportWrapper",
    "wrap_transport",
    "NO_BODY",
    "request",

    # Config
    "ClientConfig",
    "ExecutionDirectives",
    "TimeoutConfig",
    "LoggingConfig",
    "configure_logging",

    # Bodies
    "marshal_json",
    "unmarshal_json",
    "body_from_map",
    "map_from_multipart",

    # Exceptions
    "HTTPClientException",
    "ConfigurationError",
    "InvalidURLError",
    "ClientInitialisationError",
    "RequestInitialisationError",
    "RequestOptionError",
    "InvalidJSONError",
    "MarshallingJSONError",
    "MultipartError",
    "InvalidDirectiveError",
    "TransportError",
    "MaxRetriesExceededError",
    "UnexpectedStatusCodeError",
    "NoResponseBodyError",
    "ResponseBodyReadError",
    "UnexpectedRequestError",
    "CannotChangeExpectationsError",
    "ResponseSynthesisError",
    "ExpectationsNotMetError",
    "is_error",
]
