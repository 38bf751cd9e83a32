"""
multipart/form-data: тело из словаря и словарь из тела ответа.

Кодирование - urllib3 (RequestField + encode_multipart_formdata),
декодирование - стандартный email parser.
"""

import re
from email.parser import BytesParser
from email.policy import HTTP
from typing import Any, Callable, Dict, Hashable, Mapping, Optional, Tuple

import requests
from urllib3.fields import RequestField
from urllib3.filepost import encode_multipart_formdata

from ..core.exceptions import MultipartError

DEFAULT_BOUNDARY = "boundary"

# RFC 2046: 1-70 символов, не заканчивается пробелом
_BOUNDARY = re.compile(r"[0-9A-Za-z'()+_,\-./:=? ]{0,69}[0-9A-Za-z'()+_,\-./:=?]")

PartTransform = Callable[[Any, Any], Tuple[str, str, bytes]]
MapTransform = Callable[[str, str, bytes], Tuple[Hashable, Any]]


def default_transform(key: Any, value: Any) -> Tuple[str, str, bytes]:
    """Ключ - имя поля, без имени файла, строковое значение - содержимое."""
    data = value if isinstance(value, bytes) else str(value).encode("utf-8")
    return str(key), "", data


def body_from_map(
    mapping: Mapping[Any, Any],
    boundary: str = DEFAULT_BOUNDARY,
    transform: Optional[PartTransform] = None,
) -> Tuple[str, bytes]:
    """
    Закодировать словарь в тело multipart/form-data.

    Для каждого элемента transform(key, value) возвращает
    (имя поля, имя файла, содержимое) или выбрасывает исключение.

    Args:
        mapping: Элементы формы (порядок частей = порядок словаря)
        boundary: Разделитель частей
        transform: Преобразование элемента в часть (по умолчанию default_transform)

    Returns:
        (content type, body)

    Raises:
        MultipartError: невалидный boundary или ошибка transform

    Example:
        >>> ct, body = body_from_map(
        ...     {"part-id": "content data"},
        ...     boundary="ABCDEF",
        ...     transform=lambda k, v: ("field-" + k, "file-" + k, v.encode()),
        ... )
        >>> ct
        'multipart/form-data; boundary=ABCDEF'
    """
    if not isinstance(boundary, str) or not _BOUNDARY.fullmatch(boundary):
        raise MultipartError(f"multipart.body_from_map: invalid boundary: {boundary!r}")

    transform = transform or default_transform
    fields = []
    for key, value in mapping.items():
        try:
            name, filename, data = transform(key, value)
        except Exception as e:
            raise MultipartError(f"multipart.body_from_map: {e}") from e

        field = RequestField(name=name, data=data, filename=filename)
        field.make_multipart(
            content_disposition="form-data",
            content_type="application/octet-stream",
        )
        fields.append(field)

    body, content_type = encode_multipart_formdata(fields, boundary=boundary)
    return content_type, body


def map_from_multipart(
    response: requests.Response,
    transform: MapTransform,
) -> Dict[Hashable, Any]:
    """
    Разобрать тело ответа multipart/form-data в словарь.

    Для каждой части transform(имя поля, имя файла, содержимое)
    возвращает (ключ, значение).

    Raises:
        MultipartError: нет/невалидный Content-Type, ошибка разбора или transform
    """
    content_type = response.headers.get("Content-Type", "")
    header = BytesParser(policy=HTTP).parsebytes(
        f"Content-Type: {content_type}\r\n\r\n".encode("latin-1")
    )
    if header.get_content_maintype() != "multipart" or not header.get_boundary():
        raise MultipartError(
            f"multipart.map_from_multipart: invalid content type: {content_type!r}"
        )

    message = BytesParser(policy=HTTP).parsebytes(
        f"Content-Type: {content_type}\r\n\r\n".encode("latin-1") + (response.content or b"")
    )
    if message.defects:
        raise MultipartError(
            f"multipart.map_from_multipart: malformed body: {message.defects[0]!r}"
        )

    results: Dict[Hashable, Any] = {}
    for part in message.iter_parts():
        fieldname = part.get_param("name", header="content-disposition") or ""
        filename = part.get_filename() or ""
        data = part.get_payload(decode=True) or b""
        try:
            key, value = transform(fieldname, filename, data)
        except Exception as e:
            raise MultipartError(f"multipart.map_from_multipart: transform: {e}") from e
        results[key] = value

    return results
