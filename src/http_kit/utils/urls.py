"""
URL и header утилиты.

Includes:
- join_url: склейка base URL и path с экранированием path
- canonical_header_key: каноническая форма ключа заголовка
- mask_url: маскирование чувствительных query параметров для логов
"""

import posixpath
import re
from typing import Optional
from urllib.parse import parse_qsl, quote, unquote, urlencode, urlsplit, urlunsplit

from ..core.exceptions import InvalidURLError

# символы, допустимые в path без экранирования ("?" и "#" - экранируются)
_PATH_SAFE = "/$&+,:;=@!'()*"

_TOKEN_CHARS = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")

SENSITIVE_QUERY_PARAMS = {
    'api_key',
    'apikey',
    'access_token',
    'token',
    'key',
    'secret',
    'password',
    'client_secret',
}


def _parse(url: str):
    if any(ord(c) < 0x20 or ord(c) == 0x7f for c in url):
        raise InvalidURLError(f"invalid url {url!r}: invalid control character in URL")
    if url.startswith(":"):
        raise InvalidURLError(f"invalid url {url!r}: missing protocol scheme")
    try:
        parts = urlsplit(url)
        parts.port
    except ValueError as e:
        raise InvalidURLError(f"invalid url {url!r}: {e}") from e
    return parts


def join_url(base: str, path: Optional[str]) -> str:
    """
    Добавить path к base URL.

    Path очищается (".", "..", двойные слеши) и экранируется, поэтому
    "?" в path превращается в "%3F" и НЕ начинает query string.
    Завершающий слеш в path сохраняется.

    Args:
        base: Базовый URL (например "https://api.example.com/v1")
        path: Путь запроса

    Returns:
        Полный URL

    Raises:
        InvalidURLError: base или path не разбираются как URL

    Examples:
        >>> join_url("https://api.example.com", "/users/1")
        'https://api.example.com/users/1'
        >>> join_url("http://example.com", "/path?query=string")
        'http://example.com/path%3Fquery=string'
    """
    parts = _parse(base or "")
    path = path or ""
    if any(ord(c) < 0x20 or ord(c) == 0x7f for c in path):
        raise InvalidURLError(f"invalid path {path!r}: invalid control character in URL")

    joined = "/".join(p for p in (unquote(parts.path), path) if p)
    if joined:
        cleaned = posixpath.normpath(joined)
        # posix сохраняет ведущий "//", URL path - нет
        cleaned = re.sub(r"^/+", "/", cleaned)
        if cleaned == ".":
            cleaned = ""
        if path.endswith("/") and not cleaned.endswith("/"):
            cleaned += "/"
    else:
        cleaned = ""

    if parts.netloc and cleaned and not cleaned.startswith("/"):
        cleaned = "/" + cleaned

    return urlunsplit((
        parts.scheme,
        parts.netloc,
        quote(cleaned, safe=_PATH_SAFE),
        parts.query,
        parts.fragment,
    ))


def canonical_header_key(key: str) -> str:
    """
    Каноническая форма ключа заголовка: первая буква и буквы после "-"
    в верхнем регистре, остальные в нижнем.

    Ключи с недопустимыми символами (например пробел) возвращаются как есть.

    Examples:
        >>> canonical_header_key("content-type")
        'Content-Type'
        >>> canonical_header_key("x-API-key")
        'X-Api-Key'
    """
    if not key or not _TOKEN_CHARS.match(key):
        return key
    return "-".join(part[:1].upper() + part[1:].lower() for part in key.split("-"))


def mask_url(url: Optional[str], mask: str = 'REDACTED') -> Optional[str]:
    """
    Замаскировать значения чувствительных query параметров.

    Examples:
        >>> mask_url("https://api.example.com/data?token=abc&page=2")
        'https://api.example.com/data?token=REDACTED&page=2'
    """
    if not url:
        return url
    parts = urlsplit(url)
    if not parts.query:
        return url
    params = [
        (k, mask if k.lower() in SENSITIVE_QUERY_PARAMS else v)
        for k, v in parse_qsl(parts.query, keep_blank_values=True)
    ]
    return urlunsplit(parts._replace(query=urlencode(params)))
