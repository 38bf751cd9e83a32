"""
Опции запроса для Client.new_request() и convenience методов.

Каждая опция - функция, изменяющая подготовленный запрос; ошибка
опции прерывает создание запроса (RequestOptionError).

Example:
    >>> from http_kit import request
    >>> client.post(
    ...     "/users",
    ...     request.json_body({"name": "John"}),
    ...     request.accept_status(201),
    ...     request.max_retries(2),
    ... )
"""

from .body import body, json_body, multipart_form_data_from_map
from .headers import (
    accept,
    accept_json,
    add_header,
    bearer_token,
    content_type,
    header,
    non_canonical_header,
)
from .policy import accept_status, max_retries, response_body_required, stream_response
from .query import query, query_param, raw_query

__all__ = [
    # Headers
    "header",
    "non_canonical_header",
    "add_header",
    "accept",
    "accept_json",
    "content_type",
    "bearer_token",
    # Body
    "body",
    "json_body",
    "multipart_form_data_from_map",
    # Query
    "query",
    "query_param",
    "raw_query",
    # Policy
    "max_retries",
    "accept_status",
    "response_body_required",
    "stream_response",
]
