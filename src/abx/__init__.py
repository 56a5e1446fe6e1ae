"""ABX exchange feed client.

Streams order packets from an ABX server over TCP, finds gaps in the
sequence numbers, and re-requests each missing packet on its own
connection:
- packet framing and validation live apart from the request/response logic
- each request owns its connection from open to close
- malformed records are values, not exceptions
"""

from .packet import Packet, Side, decode, encode
from .store import PacketStore

__all__ = ["Packet", "PacketStore", "Side", "decode", "encode"]
