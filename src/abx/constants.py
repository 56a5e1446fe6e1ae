from __future__ import annotations

import os

PACKET_SIZE = 17
PACKET_FORMAT = "!4sciii"  # symbol, side, quantity, price, sequence
HEADER_FORMAT = "!BB"  # call type, param

CALL_STREAM_ALL = 1
CALL_RESEND = 2

SIDE_BUY = "B"
SIDE_SELL = "S"

PRINTABLE_MIN = 32
PRINTABLE_MAX = 126

# resend requests carry the sequence in a single byte
MAX_RESEND_SEQUENCE = 0xFF

DEFAULT_HOST = os.environ.get("ABX_HOST", "127.0.0.1")
DEFAULT_PORT = int(os.environ.get("ABX_PORT", "3000"))
_timeout = os.environ.get("ABX_TIMEOUT")
DEFAULT_TIMEOUT_S: float | None = float(_timeout) if _timeout else None
DEFAULT_LOG_FILE = os.environ.get("ABX_LOG_FILE", "logs.txt")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
