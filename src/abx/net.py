from __future__ import annotations

import logging
import socket
from typing import Protocol


class ByteStream(Protocol):
    def recv(self, bufsize: int) -> bytes: ...


def read_exact(stream: ByteStream, n: int) -> bytes:
    """Read until ``n`` bytes arrive or the peer closes.

    An empty result is a clean end of stream; anything shorter than ``n``
    means the peer closed mid-record.
    """
    buf = bytearray()
    while len(buf) < n:
        chunk = stream.recv(n - len(buf))
        if not chunk:
            break
        buf.extend(chunk)
    return bytes(buf)


class TcpEndpoint:
    def __init__(self, sock: socket.socket):
        self.sock = sock

    @classmethod
    def connect(
        cls,
        host: str,
        port: int,
        timeout_s: float | None = None,
    ) -> "TcpEndpoint":
        logging.info("connecting to %s:%d", host, port)
        sock = socket.create_connection((host, port), timeout=timeout_s)
        return cls(sock)

    def send(self, data: bytes) -> None:
        self.sock.sendall(data)

    def read_exact(self, n: int) -> bytes:
        return read_exact(self.sock, n)

    def close(self) -> None:
        self.sock.close()

    def __enter__(self) -> "TcpEndpoint":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
