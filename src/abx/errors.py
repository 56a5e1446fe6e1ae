"""Error kinds for the ABX client.

Malformed and short records are expected on this protocol, so they are
plain result values handed back to the caller. Only socket-level failures
are raised.
"""

from __future__ import annotations

from dataclasses import dataclass, field

DATA_PREVIEW_LEN = 16


@dataclass(frozen=True, slots=True)
class DecodeError:
    reason: str
    data_preview: bytes = field(default=b"")

    @classmethod
    def of(cls, reason: str, data: bytes = b"") -> "DecodeError":
        return cls(reason=reason, data_preview=bytes(data[:DATA_PREVIEW_LEN]))

    def __str__(self) -> str:
        return f"decode failed: {self.reason}"


@dataclass(frozen=True, slots=True)
class TruncatedFrame:
    bytes_read: int
    expected: int

    def __str__(self) -> str:
        return f"truncated frame: {self.bytes_read} of {self.expected} bytes"


class AbxError(Exception):
    """Base exception for the ABX client."""


class AbxConnectionError(AbxError):
    """Socket failure while talking to the ABX server.

    Covers refused connections, resets, and timeouts (when one is
    configured). Raised at the boundary of a single request; callers
    decide whether the run goes on.
    """

    def __init__(self, reason: str, host: str = "", port: int = 0):
        self.reason = reason
        self.host = host
        self.port = port
        super().__init__(f"connection to {host}:{port} failed: {reason}")
