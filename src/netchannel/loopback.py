from __future__ import annotations

import contextlib
import socket
import threading
import time
from dataclasses import dataclass

from .channel import Channel
from .constants import DEFAULT_ATTEMPTS
from .result import ReceiveOutcome, ReceiveResult


@dataclass(frozen=True, slots=True)
class LoopbackResult:
    bytes_sent: int
    bytes_received: int
    matched: bool
    duration_s: float
    outcome: ReceiveOutcome


def free_port(host: str = "127.0.0.1") -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind((host, 0))
        return s.getsockname()[1]


def run_loopback(
    payload: bytes,
    *,
    port: int = 0,
    host: str = "127.0.0.1",
    attempts: int = DEFAULT_ATTEMPTS,
    delay_ms: int = 50,
    join_timeout_s: float = 10.0,
) -> LoopbackResult:
    """Receive on ``host:port`` in a background thread and send ``payload`` to it."""
    port = port or free_port(host)
    chan: Channel[bytes] = Channel(port, listen_host=host)

    holder: dict[str, ReceiveResult] = {}

    def recv_runner() -> None:
        holder["r"] = chan.receive_result()

    t = threading.Thread(target=recv_runner, daemon=True)
    t.start()

    start = time.monotonic()
    try:
        # The receiver may not be listening yet; refused attempts are retried.
        chan.send(payload, port, host=host, attempts=attempts, delay_ms=delay_ms)
        t.join(timeout=join_timeout_s)
    finally:
        # release a receiver still blocked in accept(), or not listening yet
        deadline = time.monotonic() + join_timeout_s
        while t.is_alive() and time.monotonic() < deadline:
            with contextlib.suppress(OSError):
                socket.create_connection((host, port), timeout=1.0).close()
            t.join(timeout=0.05)
    duration_s = time.monotonic() - start

    result = holder.get("r")
    if result is None:
        raise TimeoutError(f"receiver on port {port} did not finish within {join_timeout_s}s")

    received = bytes(result.payload)
    return LoopbackResult(
        bytes_sent=len(payload),
        bytes_received=len(received),
        matched=received == bytes(payload),
        duration_s=duration_s,
        outcome=result.outcome,
    )
