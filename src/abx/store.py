from __future__ import annotations

from typing import Iterator

from .packet import Packet


class PacketStore:
    """Received packets keyed by sequence number.

    Owned by a single run. Upserts overwrite, so merging the same packet
    twice is a no-op; iteration is always in ascending sequence order.
    """

    def __init__(self) -> None:
        self._packets: dict[int, Packet] = {}

    def upsert(self, packet: Packet) -> None:
        self._packets[packet.sequence] = packet

    def get(self, sequence: int) -> Packet | None:
        return self._packets.get(sequence)

    def max_sequence(self) -> int | None:
        if not self._packets:
            return None
        return max(self._packets)

    def sequences(self) -> list[int]:
        return sorted(self._packets)

    def __contains__(self, sequence: object) -> bool:
        return sequence in self._packets

    def __len__(self) -> int:
        return len(self._packets)

    def __iter__(self) -> Iterator[Packet]:
        for seq in sorted(self._packets):
            yield self._packets[seq]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PacketStore):
            return NotImplemented
        return self._packets == other._packets
