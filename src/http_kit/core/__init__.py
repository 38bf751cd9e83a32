"""Core модули http-kit: клиент, транспорт, директивы, исключения."""

from .body import NO_BODY, NoBody
from .client import Client, RequestOption
from .config import ClientConfig, ExecutionDirectives, TimeoutConfig
from .directives import (
    ACCEPT_STATUS_HEADER,
    MAX_RETRIES_HEADER,
    RESERVED_HEADERS,
    RESPONSE_BODY_REQUIRED_HEADER,
    STREAM_RESPONSE_HEADER,
    parse_directives,
)
from .exceptions import (
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
from .transport import Transport, TransportWrapper, wrap_transport

__all__ = [
    "Client",
    "RequestOption",
    "ClientConfig",
    "ExecutionDirectives",
    "TimeoutConfig",
    "Transport",
    "TransportWrapper",
    "wrap_transport",
    "NO_BODY",
    "NoBody",
    "parse_directives",
    "RESERVED_HEADERS",
    "MAX_RETRIES_HEADER",
    "ACCEPT_STATUS_HEADER",
    "RESPONSE_BODY_REQUIRED_HEADER",
    "STREAM_RESPONSE_HEADER",
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
