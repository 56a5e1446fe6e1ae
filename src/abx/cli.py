from __future__ import annotations

import argparse
import json
import logging

from .client import AbxClient
from .constants import (
    DEFAULT_HOST,
    DEFAULT_LOG_FILE,
    DEFAULT_PORT,
    DEFAULT_TIMEOUT_S,
    LOG_DATE_FORMAT,
    LOG_FORMAT,
)
from .recovery import recover_all
from .session import Session
from .store import PacketStore


def configure_logging(level: str, log_file: str) -> None:
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
    logging.basicConfig(
        level=getattr(logging, level),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        handlers=handlers,
    )


def _session(args: argparse.Namespace) -> Session:
    return Session(host=args.host, port=args.port, timeout_s=args.timeout)


def _print_packets(store: PacketStore, as_json: bool, summary: dict[str, object] | None = None) -> None:
    if as_json:
        payload: dict[str, object] = {"packets": [p.as_dict() for p in store]}
        if summary is not None:
            payload["summary"] = summary
        print(json.dumps(payload, indent=2))
        return
    for packet in store:
        print(packet)


def cmd_run(args: argparse.Namespace) -> int:
    client = AbxClient(_session(args))
    report = client.run()
    _print_packets(client.store, args.json, report.as_dict())
    return 0


def cmd_stream(args: argparse.Namespace) -> int:
    client = AbxClient(_session(args))
    summary = client.fetch_stream()
    stats = None
    if summary is not None:
        stats = {"received": summary.received, "stream_end": summary.ended_by.value}
    _print_packets(client.store, args.json, stats)
    return 0


def cmd_resend(args: argparse.Namespace) -> int:
    store = PacketStore()
    report = recover_all(_session(args), store, args.sequences)
    _print_packets(store, args.json, {"recovered": report.recovered, "failed": report.failed})
    return 0 if not report.failed else 2


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="abx", description="ABX exchange feed client (stream + resend).")
    sub = p.add_subparsers(dest="cmd", required=True)

    def add_common(x: argparse.ArgumentParser) -> None:
        x.add_argument("--host", default=DEFAULT_HOST)
        x.add_argument("--port", type=int, default=DEFAULT_PORT)
        x.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT_S, help="socket timeout in seconds")
        x.add_argument(
            "--log-level",
            default="INFO",
            choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        )
        x.add_argument("--log-file", default=DEFAULT_LOG_FILE, help="append log lines here ('' to disable)")
        x.add_argument("--json", action="store_true")

    run = sub.add_parser("run", help="stream all packets, then resend any gaps")
    add_common(run)
    run.set_defaults(func=cmd_run)

    stream = sub.add_parser("stream", help="stream all packets without recovery")
    add_common(stream)
    stream.set_defaults(func=cmd_stream)

    resend = sub.add_parser("resend", help="request individual packets by sequence number")
    add_common(resend)
    resend.add_argument("sequences", type=int, nargs="+", metavar="SEQUENCE")
    resend.set_defaults(func=cmd_resend)

    args = p.parse_args(argv)
    configure_logging(args.log_level, args.log_file)
    logging.info("starting ABX client (%s)", args.cmd)

    try:
        return int(args.func(args))
    except Exception as e:
        logging.critical("fatal error: %s", e)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
