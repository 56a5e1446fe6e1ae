from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field

from .errors import AbxConnectionError
from .gaps import find_missing
from .recovery import RecoveryReport, recover_all
from .session import Session, StreamEnd, StreamSummary
from .store import PacketStore


@dataclass(slots=True)
class RunReport:
    streamed: int = 0
    stream_end: StreamEnd | None = None
    missing: list[int] = field(default_factory=list)
    recovery: RecoveryReport = field(default_factory=RecoveryReport)
    start_ts: float = field(default_factory=time.monotonic)
    end_ts: float | None = None

    @property
    def duration_s(self) -> float:
        if self.end_ts is None:
            return 0.0
        return max(0.0, self.end_ts - self.start_ts)

    def as_dict(self) -> dict[str, object]:
        return {
            "streamed": self.streamed,
            "stream_end": self.stream_end.value if self.stream_end else None,
            "missing": self.missing,
            "recovered": self.recovery.recovered,
            "failed": self.recovery.failed,
            "seconds": self.duration_s,
        }


@dataclass(slots=True)
class AbxClient:
    session: Session
    store: PacketStore = field(default_factory=PacketStore)

    def fetch_stream(self) -> StreamSummary | None:
        try:
            return self.session.stream_all(self.store)
        except AbxConnectionError as e:
            logging.error("error during stream: %s", e)
            logging.info("keeping %d packets received before the error", len(self.store))
            return None

    def run(self) -> RunReport:
        """Stream everything, find the gaps, then resend each one."""
        report = RunReport()

        summary = self.fetch_stream()
        if summary is not None:
            report.streamed = summary.received
            report.stream_end = summary.ended_by

        report.missing = find_missing(self.store)
        logging.info(
            "missing %d packets: %s",
            len(report.missing),
            ", ".join(str(seq) for seq in report.missing),
        )

        report.recovery = recover_all(self.session, self.store, report.missing)
        report.end_ts = time.monotonic()

        logging.info(
            "run complete; stored=%d recovered=%d/%d",
            len(self.store),
            len(report.recovery.recovered),
            len(report.missing),
        )
        return report
