from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from .errors import AbxConnectionError, DecodeError, TruncatedFrame
from .session import Session
from .store import PacketStore


@dataclass(slots=True)
class RecoveryReport:
    recovered: list[int] = field(default_factory=list)
    failed: list[int] = field(default_factory=list)

    @property
    def attempted(self) -> int:
        return len(self.recovered) + len(self.failed)


def recover_all(session: Session, store: PacketStore, missing: Iterable[int]) -> RecoveryReport:
    """Request each missing sequence once, in ascending order.

    Failures are logged and skipped. There is no retry within a run.
    """
    report = RecoveryReport()

    for seq in sorted(missing):
        try:
            result = session.resend(seq)
        except AbxConnectionError as e:
            logging.error("error during resend of packet #%d: %s", seq, e)
            report.failed.append(seq)
            continue

        if isinstance(result, TruncatedFrame):
            logging.error("failed to receive packet #%d; only read %d bytes", seq, result.bytes_read)
            report.failed.append(seq)
            continue
        if isinstance(result, DecodeError):
            logging.error("invalid packet received for sequence #%d (%s)", seq, result.reason)
            report.failed.append(seq)
            continue

        store.upsert(result)
        if result.sequence != seq:
            logging.warning("resend of #%d returned packet #%d", seq, result.sequence)
            report.failed.append(seq)
            continue

        logging.info("recovered missing packet #%d", seq)
        report.recovered.append(seq)

    return report
