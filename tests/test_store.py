from __future__ import annotations

from conftest import make_packet

from abx.gaps import find_missing
from abx.store import PacketStore


def store_with(*seqs: int) -> PacketStore:
    store = PacketStore()
    for seq in seqs:
        store.upsert(make_packet(seq))
    return store


def test_empty_store_has_no_gaps():
    assert find_missing(PacketStore()) == []


def test_gap_in_the_middle():
    assert find_missing(store_with(1, 2, 4, 5)) == [3]


def test_gaps_counted_from_one():
    assert find_missing(store_with(2, 3)) == [1]


def test_multiple_gaps_ascending():
    assert find_missing(store_with(7, 2, 5)) == [1, 3, 4, 6]


def test_upsert_is_idempotent():
    once = store_with(1)
    twice = store_with(1)
    twice.upsert(make_packet(1))
    assert once == twice
    assert len(twice) == 1


def test_upsert_overwrites_same_sequence():
    store = store_with(1)
    store.upsert(make_packet(1, symbol="AAPL"))
    assert store.get(1).symbol == "AAPL"


def test_iterates_in_sequence_order():
    store = store_with(4, 1, 3, 2)
    assert [p.sequence for p in store] == [1, 2, 3, 4]
    assert store.sequences() == [1, 2, 3, 4]
    assert store.max_sequence() == 4
    assert 3 in store and 9 not in store
