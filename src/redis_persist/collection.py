"""CollectionBinding — keeps an in-memory list in step with a Redis set.

A binding ties three things together for the length of one operation:

* ``key`` — the Redis set holding the members;
* ``seq`` — a caller-owned mutable sequence, borrowed, never copied;
* ``element_type`` — the class of the sequence's elements.

The element type decides the strategy once, at construction:

* ``ElementKind.RECORD`` — elements implement :class:`IdentifiedValue`.
  Each is stored under its own key and the set holds those keys.  Save and
  remove cascade to the records.
* ``ElementKind.SCALAR`` — the set holds the element values themselves.

A set has no order and no duplicates, so a save/load round trip keeps
membership only.  Bindings are not atomic as a whole: the set update and
the per-record writes are separate commands.
"""

from __future__ import annotations

import logging
from collections.abc import MutableSequence
from enum import Enum
from typing import TYPE_CHECKING, Any

from redis_persist._internal.scalars import encode_member, parse_member
from redis_persist.capabilities import IdentifiedValue, Loader, Remover, Saver
from redis_persist.exceptions import InvalidBindingTypeError

if TYPE_CHECKING:
    import redis

    from redis_persist.dispatcher import Persister

logger = logging.getLogger(__name__)


class ElementKind(Enum):
    RECORD = "record"
    SCALAR = "scalar"


class CollectionBinding(Saver, Loader, Remover):
    """Binds a mutable sequence to the Redis set at ``key``.

    Build it with :func:`make_binding` (or :meth:`Persister.bind`) and hand
    it to the persister like any other value; its hooks take over.

    Elements must all be of one kind.  Mixing records and scalars in one
    sequence is not supported.
    """

    def __init__(
        self,
        persister: Persister,
        key: str,
        seq: MutableSequence[Any],
        element_type: type,
    ) -> None:
        self._persister = persister
        self.key = key
        self.seq = seq
        self.element_type = element_type
        self.kind = (
            ElementKind.RECORD if issubclass(element_type, IdentifiedValue) else ElementKind.SCALAR
        )

    # ── hooks ────────────────────────────────────────────────

    def redis_save(self, conn: redis.Redis) -> None:
        """Add every element to the set in one ``SADD``.

        Record elements are saved under their own keys first.  An empty
        sequence sends nothing, so an existing remote set is left as is.
        """
        if len(self.seq) == 0:
            return
        if self.kind is ElementKind.RECORD:
            members = []
            for elem in self.seq:
                self._persister.save_with_conn(conn, elem)
                members.append(elem.get_key())
        else:
            members = [encode_member(elem) for elem in self.seq]
        conn.sadd(self.key, *members)

    def redis_load(self, conn: redis.Redis) -> None:
        """Replace the sequence's contents with the set's current members."""
        if self.kind is ElementKind.RECORD:
            loaded = self._load_records(conn)
        else:
            loaded = [parse_member(raw, self.element_type) for raw in conn.smembers(self.key)]
        # deque and array.array reject slice assignment from a list.
        for _ in range(len(self.seq)):
            self.seq.pop()
        self.seq.extend(loaded)

    def redis_remove(self, conn: redis.Redis) -> None:
        """Drop every element from the set in one ``SREM``.

        Record elements are also deleted under their own keys.
        """
        if len(self.seq) == 0:
            return
        if self.kind is ElementKind.RECORD:
            members = []
            for elem in self.seq:
                self._persister.remove_with_conn(conn, elem)
                members.append(elem.get_key())
        else:
            members = [encode_member(elem) for elem in self.seq]
        conn.srem(self.key, *members)

    # ── helpers ──────────────────────────────────────────────

    def _load_records(self, conn: redis.Redis) -> list[Any]:
        # SORT ... BY nosort GET * dereferences every member in one round trip.
        payloads = conn.sort(self.key, by="nosort", get="*")
        codec = self._persister.codec
        records = []
        for data in payloads:
            if data is None:
                logger.warning("Skipping missing record in set '%s'", self.key)
                continue
            elem = self.element_type.__new__(self.element_type)
            codec.decode(data, elem)
            records.append(elem)
        return records

    def __repr__(self) -> str:
        return (
            f"CollectionBinding(key={self.key!r}, element_type={self.element_type.__name__}, "
            f"kind={self.kind.value}, size={len(self.seq)})"
        )


def make_binding(
    persister: Persister,
    key: str,
    seq: Any,
    element_type: Any,
) -> CollectionBinding:
    """Validate the arguments and build a :class:`CollectionBinding`.

    Raises:
        InvalidBindingTypeError: *seq* is not a mutable sequence, or
            *element_type* is not a class.
    """
    if not isinstance(seq, MutableSequence):
        raise InvalidBindingTypeError(
            f"expected a mutable sequence, got {type(seq).__name__}"
        )
    if not isinstance(element_type, type):
        raise InvalidBindingTypeError(f"element_type must be a class, got {element_type!r}")
    return CollectionBinding(persister, key, seq, element_type)
