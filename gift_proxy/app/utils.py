"""
Small utilities shared by the handler and the adapters.
"""

import base64
import binascii
import json
from typing import Any, Optional, Union

from .config import RAW_EXCERPT_LIMIT


def truncate(text: Optional[str], limit: int = RAW_EXCERPT_LIMIT) -> str:
    """Cap an upstream excerpt so error bodies stay bounded."""
    return (text or "")[:limit]


def decode_body(body: Union[str, bytes, None], is_base64: bool = False) -> bytes:
    """
    Normalize an event body to bytes.
    Event-style platforms hand us a str (optionally base64); ASGI hands us bytes.
    """
    if body is None:
        return b""
    if isinstance(body, str):
        body = body.encode("utf-8")
    if is_base64:
        try:
            return base64.b64decode(body, validate=True)
        except (binascii.Error, ValueError):
            # leave it to the JSON step to reject
            return body
    return body


def _reject_constant(name: str):
    raise ValueError(f"Non-standard JSON constant: {name}")


def strict_loads(data: Union[str, bytes]) -> Any:
    """json.loads that rejects NaN/Infinity the way browsers' JSON.parse does."""
    return json.loads(data, parse_constant=_reject_constant)


def to_json(obj: Any) -> str:
    return json.dumps(obj, ensure_ascii=False, allow_nan=False)
