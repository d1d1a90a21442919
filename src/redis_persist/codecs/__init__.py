"""Payload codecs for generically persisted values."""

from redis_persist.codecs.base import Codec
from redis_persist.codecs.json_codec import JsonCodec
from redis_persist.codecs.pickle_codec import PickleCodec

__all__ = ["Codec", "JsonCodec", "PickleCodec"]
