"""PickleCodec — binary codec for arbitrary instance state (the default)."""

from __future__ import annotations

import pickle
from typing import Any

from redis_persist.codecs.base import Codec, restore_state, state_of
from redis_persist.exceptions import CodecError


class PickleCodec(Codec):
    """Pickles the instance ``__dict__``.

    Handles nested objects, sets and dates; only use it against a Redis
    you trust, since unpickling runs code from the payload.
    """

    def __init__(self, protocol: int = pickle.HIGHEST_PROTOCOL) -> None:
        self._protocol = protocol

    def encode(self, value: Any) -> bytes:
        state = state_of(value)
        try:
            return pickle.dumps(state, protocol=self._protocol)
        except (pickle.PicklingError, TypeError, AttributeError) as exc:
            raise CodecError("encode", str(exc)) from exc

    def decode(self, data: bytes, value: Any) -> None:
        try:
            state = pickle.loads(data)
        except (pickle.UnpicklingError, EOFError, TypeError, ValueError, AttributeError) as exc:
            raise CodecError("decode", str(exc)) from exc
        restore_state(value, state)
