from __future__ import annotations

from .store import PacketStore


def find_missing(store: PacketStore) -> list[int]:
    """Sequence numbers in ``[1, max]`` that the store lacks, ascending.

    Sequences are assumed dense from 1, so anything past the highest
    received packet cannot be detected here.
    """
    max_seq = store.max_sequence()
    if max_seq is None:
        return []
    return [seq for seq in range(1, max_seq + 1) if seq not in store]
