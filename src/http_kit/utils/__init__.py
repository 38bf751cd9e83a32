"""Утилиты: URL, JSON и multipart тела."""

from .json_body import marshal_json, unmarshal_json
from .multipart import DEFAULT_BOUNDARY, body_from_map, map_from_multipart
from .urls import canonical_header_key, join_url, mask_url

__all__ = [
    "join_url",
    "canonical_header_key",
    "mask_url",
    "marshal_json",
    "unmarshal_json",
    "body_from_map",
    "map_from_multipart",
    "DEFAULT_BOUNDARY",
]
