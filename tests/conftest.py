from __future__ import annotations

import socket
import threading

import pytest

from abx.net import read_exact
from abx.packet import Packet, Side
from abx.session import Session


def make_packet(seq: int, symbol: str = "MSFT", side: Side = Side.BUY, qty: int = 50, price: int = 100) -> Packet:
    return Packet(symbol=symbol, side=side, quantity=qty, price=price, sequence=seq)


class FakeAbxServer:
    """Loopback ABX server: canned stream body plus canned resend replies.

    Serves one connection at a time and closes it after replying, like the
    real server. Every request header it sees is kept in ``requests``.
    """

    def __init__(self) -> None:
        self.stream_body = b""
        self.resend_replies: dict[int, bytes] = {}
        self.requests: list[bytes] = []
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._sock.bind(("127.0.0.1", 0))
        self._sock.listen(8)
        self._sock.settimeout(0.1)
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._serve, daemon=True)

    @property
    def address(self) -> tuple[str, int]:
        return self._sock.getsockname()

    def set_stream(self, *packets: Packet, tail: bytes = b"") -> None:
        self.stream_body = b"".join(p.to_bytes() for p in packets) + tail

    def set_resend(self, param: int, reply: bytes | Packet) -> None:
        self.resend_replies[param] = reply.to_bytes() if isinstance(reply, Packet) else reply

    def start(self) -> None:
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        self._thread.join(timeout=5.0)
        self._sock.close()

    def _serve(self) -> None:
        while not self._stop.is_set():
            try:
                conn, _ = self._sock.accept()
            except socket.timeout:
                continue
            with conn:
                conn.settimeout(5.0)
                header = read_exact(conn, 2)
                self.requests.append(header)
                if header[:1] == b"\x01":
                    conn.sendall(self.stream_body)
                elif header[:1] == b"\x02":
                    conn.sendall(self.resend_replies.get(header[1], b""))


@pytest.fixture
def abx_server():
    server = FakeAbxServer()
    server.start()
    yield server
    server.stop()


@pytest.fixture
def session(abx_server: FakeAbxServer) -> Session:
    host, port = abx_server.address
    return Session(host=host, port=port, timeout_s=5.0)


@pytest.fixture
def closed_port() -> int:
    s = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    s.bind(("127.0.0.1", 0))
    port = s.getsockname()[1]
    s.close()
    return port
