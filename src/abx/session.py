from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Union

from .constants import (
    CALL_RESEND,
    CALL_STREAM_ALL,
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_TIMEOUT_S,
    MAX_RESEND_SEQUENCE,
    PACKET_SIZE,
)
from .errors import AbxConnectionError, DecodeError, TruncatedFrame
from .net import TcpEndpoint
from .packet import Packet, decode, request_header
from .store import PacketStore

ResendResult = Union[Packet, DecodeError, TruncatedFrame]


class StreamEnd(enum.Enum):
    CLEAN_EOF = "clean_eof"
    TRUNCATED = "truncated"
    INVALID = "invalid"


@dataclass(frozen=True, slots=True)
class StreamSummary:
    received: int
    ended_by: StreamEnd


@dataclass(slots=True)
class Session:
    """Issues ABX requests, one fresh TCP connection per request."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    timeout_s: float | None = DEFAULT_TIMEOUT_S

    def _connect(self) -> TcpEndpoint:
        try:
            return TcpEndpoint.connect(self.host, self.port, timeout_s=self.timeout_s)
        except OSError as e:
            raise AbxConnectionError(str(e), self.host, self.port) from e

    def stream_all(self, store: PacketStore) -> StreamSummary:
        """Call type 1: upsert every valid record until the server closes.

        A short or invalid record ends the stream early; packets already
        stored are kept.
        """
        received = 0
        ended_by = StreamEnd.CLEAN_EOF
        with self._connect() as conn:
            try:
                conn.send(request_header(CALL_STREAM_ALL))
                while True:
                    raw = conn.read_exact(PACKET_SIZE)
                    if not raw:
                        break
                    if len(raw) < PACKET_SIZE:
                        logging.warning(
                            "partial packet received with only %d bytes; stopping stream", len(raw)
                        )
                        ended_by = StreamEnd.TRUNCATED
                        break

                    result = decode(raw)
                    if isinstance(result, DecodeError):
                        logging.warning("invalid packet during stream (%s); stopping stream", result.reason)
                        ended_by = StreamEnd.INVALID
                        break

                    store.upsert(result)
                    received += 1
            except OSError as e:
                raise AbxConnectionError(str(e), self.host, self.port) from e

        logging.info("stream complete; valid packets received=%d total stored=%d", received, len(store))
        return StreamSummary(received=received, ended_by=ended_by)

    def resend(self, sequence: int) -> ResendResult:
        """Call type 2: ask the server for one packet by sequence number."""
        if sequence > MAX_RESEND_SEQUENCE:
            # the request carries one byte; the server sees sequence % 256
            logging.warning(
                "sequence %d does not fit the one-byte resend request; sending %d",
                sequence,
                sequence & MAX_RESEND_SEQUENCE,
            )

        with self._connect() as conn:
            try:
                conn.send(request_header(CALL_RESEND, sequence))
                raw = conn.read_exact(PACKET_SIZE)
            except OSError as e:
                raise AbxConnectionError(str(e), self.host, self.port) from e

        if len(raw) < PACKET_SIZE:
            return TruncatedFrame(bytes_read=len(raw), expected=PACKET_SIZE)
        return decode(raw)
