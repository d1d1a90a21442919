"""redis_persist — map in-memory values onto Redis keys and sets.

Values opt in by subclassing :class:`IdentifiedValue` (generic encoded
storage) and/or the :class:`Saver` / :class:`Loader` / :class:`Remover`
hooks.  Lists are kept in step with Redis sets through
:class:`CollectionBinding`.
"""

from redis_persist.capabilities import (
    IdentifiedValue,
    Loader,
    Operation,
    Record,
    Remover,
    Saver,
    Strategy,
    classify,
)
from redis_persist.collection import CollectionBinding, ElementKind, make_binding
from redis_persist.config import RedisConfig
from redis_persist.counter import Counter
from redis_persist.dispatcher import Persister
from redis_persist.exceptions import (
    CodecError,
    CounterError,
    InvalidBindingTypeError,
    PersistError,
    PoolClosedError,
    RecordNotFoundError,
    UnsupportedTypeError,
)
from redis_persist.pool import RedisPool

__all__ = [
    "CodecError",
    "CollectionBinding",
    "Counter",
    "CounterError",
    "ElementKind",
    "IdentifiedValue",
    "InvalidBindingTypeError",
    "Loader",
    "Operation",
    "PersistError",
    "Persister",
    "PoolClosedError",
    "Record",
    "RecordNotFoundError",
    "RedisConfig",
    "RedisPool",
    "Remover",
    "Saver",
    "Strategy",
    "UnsupportedTypeError",
    "classify",
    "make_binding",
]
