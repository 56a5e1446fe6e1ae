from __future__ import annotations

import enum
import struct
from dataclasses import dataclass
from typing import Union

from .constants import (
    HEADER_FORMAT,
    PACKET_FORMAT,
    PACKET_SIZE,
    PRINTABLE_MAX,
    PRINTABLE_MIN,
    SIDE_BUY,
    SIDE_SELL,
)
from .errors import DecodeError

SYMBOL_LEN = 4


class Side(str, enum.Enum):
    BUY = SIDE_BUY
    SELL = SIDE_SELL

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Packet:
    symbol: str
    side: Side
    quantity: int
    price: int
    sequence: int

    def __str__(self) -> str:
        return f"[{self.sequence}] {self.symbol} {self.side} Qty:{self.quantity} Price:{self.price}"

    def to_bytes(self) -> bytes:
        raw_symbol = self.symbol.encode("ascii")
        if len(raw_symbol) > SYMBOL_LEN:
            raise ValueError(f"symbol too long: {self.symbol!r}")
        return struct.pack(
            PACKET_FORMAT,
            raw_symbol.ljust(SYMBOL_LEN, b" "),
            self.side.value.encode("ascii"),
            self.quantity,
            self.price,
            self.sequence,
        )

    def as_dict(self) -> dict[str, object]:
        return {
            "sequence": self.sequence,
            "symbol": self.symbol,
            "side": self.side.value,
            "quantity": self.quantity,
            "price": self.price,
        }


DecodeResult = Union[Packet, DecodeError]


def decode(raw: bytes) -> DecodeResult:
    """Parse one 17-byte record.

    Never raises for bad input: a :class:`DecodeError` is returned instead.
    Checks run in wire order, so the reason names the first bad field.
    """
    if len(raw) != PACKET_SIZE:
        return DecodeError.of("bad_length", raw)

    symbol, side, quantity, price, sequence = struct.unpack(PACKET_FORMAT, raw)

    if any(b < PRINTABLE_MIN or b > PRINTABLE_MAX for b in symbol):
        return DecodeError.of("symbol_not_printable", raw)
    if side not in (b"B", b"S"):
        return DecodeError.of("bad_side", raw)
    if quantity < 0:
        return DecodeError.of("negative_quantity", raw)
    if price < 0:
        return DecodeError.of("negative_price", raw)
    if sequence <= 0:
        return DecodeError.of("non_positive_sequence", raw)

    return Packet(
        symbol=symbol.decode("ascii").strip(),
        side=Side(side.decode("ascii")),
        quantity=quantity,
        price=price,
        sequence=sequence,
    )


def encode(packet: Packet) -> bytes:
    return packet.to_bytes()


def request_header(call_type: int, param: int = 0) -> bytes:
    # param is a single byte on the wire; higher bits are dropped
    return struct.pack(HEADER_FORMAT, call_type, param & 0xFF)
