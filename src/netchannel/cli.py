from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict

from .channel import Channel, is_valid_port
from .constants import (
    DEFAULT_ATTEMPTS,
    DEFAULT_DELAY_MS,
    DEFAULT_HOST,
    DEFAULT_LISTEN_HOST,
    DEFAULT_PORT,
    MAX_PORT,
    MIN_PORT,
)
from .errors import SendFailed
from .loopback import run_loopback

log = logging.getLogger(__name__)


def port_number(value: str) -> int:
    port = int(value)
    if not is_valid_port(port):
        raise argparse.ArgumentTypeError(f"port must be in the range {MIN_PORT}-{MAX_PORT}, got {port}")
    return port


def _emit(payload: dict, as_json: bool) -> None:
    print(json.dumps(payload, indent=2) if as_json else payload)


def cmd_send(args: argparse.Namespace) -> int:
    if args.file:
        with open(args.file, "rb") as f:
            data = f.read()
    else:
        data = args.message.encode(args.encoding)

    chan: Channel[bytes] = Channel()
    try:
        chan.send(data, args.dest_port, host=args.dest_host, attempts=args.attempts, delay_ms=args.delay_ms)
    except SendFailed as exc:
        log.error("%s", exc)
        return 1

    _emit({"role": "sender", "bytes": len(data), "dest": f"{args.dest_host}:{args.dest_port}"}, args.json)
    return 0


def cmd_recv(args: argparse.Namespace) -> int:
    chan: Channel[bytes] = Channel(args.listen_port, listen_host=args.listen_host)
    result = chan.receive_result()

    if args.out:
        with open(args.out, "wb") as out:
            out.write(result.payload)
    elif args.text:
        print(result.payload.text)
    else:
        sys.stdout.buffer.write(bytes(result.payload))
        sys.stdout.buffer.flush()

    summary = {"role": "receiver", "bytes": len(result.payload), "outcome": result.outcome.value}
    if args.out or args.json:
        _emit(summary, args.json)
    else:
        log.info("received %s", summary)
    return 1 if result.error is not None else 0


def cmd_loopback(args: argparse.Namespace) -> int:
    data = args.message.encode(args.encoding) if args.size_bytes is None else b"A" * args.size_bytes
    try:
        r = run_loopback(data, port=args.port, attempts=args.attempts, delay_ms=args.delay_ms)
    except SendFailed as exc:
        log.error("%s", exc)
        return 1

    payload = {"role": "loopback", **asdict(r)}
    payload["outcome"] = r.outcome.value
    _emit(payload, args.json)
    return 0 if r.matched else 1


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="netchannel", description="One-shot TCP message send/receive.")
    p.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    sub = p.add_subparsers(dest="cmd", required=True)

    def add_common(x: argparse.ArgumentParser) -> None:
        x.add_argument("--json", action="store_true")

    def add_retry(x: argparse.ArgumentParser) -> None:
        x.add_argument("--attempts", type=int, default=DEFAULT_ATTEMPTS)
        x.add_argument("--delay-ms", type=int, default=DEFAULT_DELAY_MS)

    send = sub.add_parser("send", help="send one message to a receiver")
    add_common(send)
    add_retry(send)
    send.add_argument("--dest-host", default=DEFAULT_HOST)
    send.add_argument("--dest-port", type=port_number, default=DEFAULT_PORT)
    send.add_argument("--encoding", default="utf-8")
    what = send.add_mutually_exclusive_group(required=True)
    what.add_argument("--message")
    what.add_argument("--file")
    send.set_defaults(func=cmd_send)

    recv = sub.add_parser("recv", help="accept one connection and read one message")
    add_common(recv)
    recv.add_argument("--listen-host", default=DEFAULT_LISTEN_HOST)
    recv.add_argument("--listen-port", type=int, default=DEFAULT_PORT)
    recv.add_argument("--out", default=None)
    recv.add_argument("--text", action="store_true", help="print the message as text")
    recv.set_defaults(func=cmd_recv)

    loop = sub.add_parser("loopback", help="send a message to a receiver on this host and compare")
    add_common(loop)
    add_retry(loop)
    loop.set_defaults(delay_ms=50)
    loop.add_argument("--port", type=int, default=0)
    loop.add_argument("--message", default="ping")
    loop.add_argument("--encoding", default="utf-8")
    loop.add_argument("--size-bytes", type=int, default=None)
    loop.set_defaults(func=cmd_loopback)

    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(asctime)s [%(levelname)s] %(message)s")
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
