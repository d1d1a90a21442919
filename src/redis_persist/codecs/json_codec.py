"""JsonCodec — human-readable codec for values with JSON-friendly state."""

from __future__ import annotations

import json
from typing import Any

from redis_persist.codecs.base import Codec, restore_state, state_of
from redis_persist.exceptions import CodecError


class JsonCodec(Codec):
    """Stores the instance ``__dict__`` as UTF-8 JSON.

    Only works for state made of ``str``, numbers, ``bool``, ``None``,
    lists and string-keyed dicts.  Tuples come back as lists.
    """

    def encode(self, value: Any) -> bytes:
        state = state_of(value)
        try:
            return json.dumps(state, separators=(",", ":")).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise CodecError("encode", str(exc)) from exc

    def decode(self, data: bytes, value: Any) -> None:
        try:
            state = json.loads(data)
        except (UnicodeDecodeError, ValueError) as exc:
            raise CodecError("decode", str(exc)) from exc
        restore_state(value, state)
