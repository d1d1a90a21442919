"""Tests for CollectionBinding — lists kept in step with Redis sets."""

from array import array
from collections import deque
from dataclasses import dataclass
from unittest.mock import MagicMock

import pytest

from conftest import User
from redis_persist import (
    CodecError,
    ElementKind,
    InvalidBindingTypeError,
    Persister,
    Saver,
    make_binding,
)


@dataclass
class HookedUser(User, Saver):
    def redis_save(self, conn):
        conn.hset("hooked", self.get_key(), self.name)


# ── construction ─────────────────────────────────────────────


def test_record_kind(persister):
    binding = persister.bind("team", [], User)
    assert binding.kind is ElementKind.RECORD


@pytest.mark.parametrize("element_type", [int, str, bytes, float, bool])
def test_scalar_kind(persister, element_type):
    assert persister.bind("k", [], element_type).kind is ElementKind.SCALAR


@pytest.mark.parametrize("seq", [(1, 2), "abc", None, {1, 2}, {"a": 1}, 42])
def test_rejects_non_mutable_sequence(persister, seq):
    with pytest.raises(InvalidBindingTypeError):
        make_binding(persister, "k", seq, int)


def test_rejects_non_class_element_type(persister):
    with pytest.raises(InvalidBindingTypeError):
        make_binding(persister, "k", [], "int")


def test_binding_borrows_sequence(persister):
    seq = [1, 2]
    assert persister.bind("k", seq, int).seq is seq


# ── empty sequences ──────────────────────────────────────────


def test_empty_save_makes_no_calls():
    binding = make_binding(Persister(MagicMock()), "k", [], User)
    conn = MagicMock()
    binding.redis_save(conn)
    assert conn.mock_calls == []


def test_empty_remove_makes_no_calls():
    binding = make_binding(Persister(MagicMock()), "k", [], int)
    conn = MagicMock()
    binding.redis_remove(conn)
    assert conn.mock_calls == []


def test_empty_save_leaves_existing_set(persister, raw):
    persister.save_list("nums", [1, 2], int)
    persister.save_list("nums", [], int)
    assert raw.smembers("nums") == {b"1", b"2"}


# ── record elements ──────────────────────────────────────────


def test_records_roundtrip(persister, raw, users):
    persister.save_list("team", users, User)
    assert raw.smembers("team") == {b"user:1", b"user:2", b"user:3"}

    loaded: list[User] = []
    persister.load_list("team", loaded, User)
    assert {u.get_key() for u in loaded} == {"user:1", "user:2", "user:3"}
    assert sorted(loaded, key=lambda u: u.id) == users


def test_records_are_fresh_instances(persister, users):
    persister.save_list("team", users, User)
    loaded: list[User] = []
    persister.load_list("team", loaded, User)
    assert all(isinstance(u, User) for u in loaded)
    assert not any(u is original for u in loaded for original in users)


def test_records_single_add(users):
    persister = Persister(MagicMock())
    conn = MagicMock()
    persister.bind("team", users, User).redis_save(conn)
    conn.sadd.assert_called_once_with("team", "user:1", "user:2", "user:3")
    assert conn.set.call_count == 3


def test_records_remove_cascades(persister, raw, users):
    persister.save_list("team", users, User)
    persister.remove_list("team", users, User)

    for user in users:
        assert not raw.exists(user.get_key())
    assert not raw.exists("team")

    loaded: list[User] = [User(id=9)]
    persister.load_list("team", loaded, User)
    assert loaded == []


def test_records_partial_remove(persister, raw, users):
    persister.save_list("team", users, User)
    persister.remove_list("team", users[:1], User)

    assert raw.smembers("team") == {b"user:2", b"user:3"}
    assert not raw.exists("user:1")
    assert raw.exists("user:2")


def test_records_missing_payload_skipped(persister, raw, users, caplog):
    persister.save_list("team", users, User)
    raw.delete("user:2")

    loaded: list[User] = []
    persister.load_list("team", loaded, User)
    assert {u.id for u in loaded} == {1, 3}
    assert "Skipping missing record" in caplog.text


def test_records_use_element_hooks(persister, raw):
    members = [HookedUser(id=1, name="a"), HookedUser(id=2, name="b")]
    persister.save_list("hooked_team", members, HookedUser)

    assert raw.hgetall("hooked") == {b"user:1": b"a", b"user:2": b"b"}
    assert not raw.exists("user:1")
    assert raw.smembers("hooked_team") == {b"user:1", b"user:2"}


def test_duplicate_records_collapse(persister, raw):
    persister.save_list("team", [User(id=1), User(id=1)], User)
    assert raw.scard("team") == 1


# ── scalar elements ──────────────────────────────────────────


def test_ints_collapse_duplicates(persister):
    persister.save_list("nums", [1, 2, 2, 3], int)

    loaded: list[int] = []
    persister.load_list("nums", loaded, int)
    assert len(loaded) == 3
    assert set(loaded) == {1, 2, 3}


def test_strings_roundtrip(persister):
    persister.save_list("names", ["ada", "linus"], str)
    loaded: list[str] = []
    persister.load_list("names", loaded, str)
    assert sorted(loaded) == ["ada", "linus"]


def test_bytes_roundtrip(persister):
    persister.save_list("blobs", [b"\x00\x01", b"\xff"], bytes)
    loaded: list[bytes] = []
    persister.load_list("blobs", loaded, bytes)
    assert set(loaded) == {b"\x00\x01", b"\xff"}


def test_floats_roundtrip(persister):
    persister.save_list("ratios", [0.5, 1.25], float)
    loaded: list[float] = []
    persister.load_list("ratios", loaded, float)
    assert set(loaded) == {0.5, 1.25}


def test_bools_stored_as_ints(persister, raw):
    persister.save_list("flags", [True, False], bool)
    assert raw.smembers("flags") == {b"1", b"0"}

    loaded: list[bool] = []
    persister.load_list("flags", loaded, bool)
    assert set(loaded) == {True, False}


def test_load_replaces_contents(persister):
    persister.save_list("nums", [5], int)
    seq = [1, 2, 3]
    persister.load_list("nums", seq, int)
    assert seq == [5]


def test_load_missing_set_empties_sequence(persister):
    seq = [1, 2]
    persister.load_list("never-saved", seq, int)
    assert seq == []


def test_load_unparsable_member(persister, raw):
    raw.sadd("nums", "not-a-number")
    with pytest.raises(CodecError):
        persister.load_list("nums", [], int)


def test_scalar_remove(persister, raw):
    persister.save_list("nums", [1, 2, 3], int)
    persister.remove_list("nums", [2, 3], int)
    assert raw.smembers("nums") == {b"1"}


def test_unsupported_scalar_rejected(persister):
    with pytest.raises(CodecError):
        persister.save_list("things", [object()], object)


def test_load_into_deque(persister):
    persister.save_list("nums", [1, 2], int)
    seq = deque([9])
    persister.load_list("nums", seq, int)
    assert sorted(seq) == [1, 2]


def test_load_into_array(persister):
    persister.save_list("nums", [1, 2], int)
    seq = array("q", [9])
    persister.load_list("nums", seq, int)
    assert sorted(seq) == [1, 2]


def test_load_records_into_deque(persister, users):
    persister.save_list("team", users, User)
    seq = deque([User(id=42)])
    persister.load_list("team", seq, User)
    assert {u.id for u in seq} == {1, 2, 3}


# ── strategy fixed at construction ───────────────────────────


def test_record_load_skips_numeric_sort():
    persister = Persister(MagicMock())
    conn = MagicMock()
    conn.sort.return_value = []
    persister.bind("team", [], User).redis_load(conn)
    conn.sort.assert_called_once_with("team", by="nosort", get="*")


def test_record_kind_cascades_each_element(users):
    persister = MagicMock()
    conn = MagicMock()
    make_binding(persister, "team", users, User).redis_remove(conn)
    assert persister.remove_with_conn.call_count == 3
    conn.srem.assert_called_once_with("team", "user:1", "user:2", "user:3")


def test_scalar_kind_never_recurses():
    persister = MagicMock()
    conn = MagicMock()
    binding = make_binding(persister, "nums", [1, 2, True], int)
    binding.redis_save(conn)
    binding.redis_remove(conn)
    assert persister.save_with_conn.call_count == 0
    assert persister.remove_with_conn.call_count == 0
    conn.sadd.assert_called_once_with("nums", 1, 2, 1)
