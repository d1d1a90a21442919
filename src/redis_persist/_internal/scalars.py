"""Encoding and parsing of scalar set members."""

from __future__ import annotations

from typing import Any

from redis_persist.exceptions import CodecError


def encode_member(value: Any) -> bytes | str | int | float:
    """Return *value* in a form redis-py accepts as a command argument."""
    # redis-py rejects bools outright; store them as 1/0.
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (bytes, str, int, float)):
        return value
    raise CodecError("encode", f"'{type(value).__name__}' is not a scalar set member")


def parse_member(raw: bytes | str, element_type: type) -> Any:
    """Parse a raw set member back into *element_type*."""
    if element_type is bytes:
        return raw if isinstance(raw, bytes) else raw.encode("utf-8")
    try:
        text = raw.decode("utf-8") if isinstance(raw, bytes) else raw
        if element_type is str:
            return text
        if element_type is bool:
            return bool(int(text))
        return element_type(text)
    except (UnicodeDecodeError, ValueError, TypeError) as exc:
        raise CodecError("decode", f"member {raw!r} is not a valid {element_type.__name__}") from exc
