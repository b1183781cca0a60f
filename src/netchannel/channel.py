from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from .constants import (
    DEFAULT_ATTEMPTS,
    DEFAULT_DELAY_MS,
    DEFAULT_HOST,
    DEFAULT_LISTEN_HOST,
    DEFAULT_PORT,
    MAX_BUFFER,
    MAX_PORT,
    MIN_PORT,
)
from .errors import SendFailed
from .message import BytesCodec, Codec, TextCodec
from .net import TcpConnector, TcpListener, read_once
from .result import ReceiveResult

T = TypeVar("T")

log = logging.getLogger(__name__)


def is_valid_port(port: int) -> bool:
    return MIN_PORT <= port <= MAX_PORT


@dataclass
class Channel(Generic[T]):
    """Sends payloads to a remote ``host:port`` and receives one payload at a time on ``port``.

    The channel holds configuration only. ``send`` and ``receive`` each open
    their own sockets and close them before returning, so a channel can be
    kept around indefinitely without holding network resources. Calls block
    the calling thread; run them on separate threads for concurrent use.

    With ``record_history=True`` every payload successfully sent or received
    is appended to ``history``. The history is not synchronised and must only
    be written from one thread.
    """

    port: int = DEFAULT_PORT
    codec: Codec[Any] = field(default_factory=BytesCodec)
    listen_host: str = DEFAULT_LISTEN_HOST
    connector: TcpConnector = field(default_factory=TcpConnector)
    record_history: bool = False
    logger: logging.Logger = field(default=log, repr=False, compare=False)
    history: list[T] | None = field(init=False, default=None)

    def __post_init__(self) -> None:
        if not is_valid_port(self.port):
            self.logger.warning(
                "Port must be in the range %d-%d, got %r. Using default %d.",
                MIN_PORT,
                MAX_PORT,
                self.port,
                DEFAULT_PORT,
            )
            self.port = DEFAULT_PORT
        if self.record_history:
            self.history = []

    @classmethod
    def text(cls, port: int = DEFAULT_PORT, **kwargs: Any) -> "Channel[str]":
        encoding = kwargs.pop("encoding", None)
        codec = TextCodec(encoding) if encoding else TextCodec()
        return cls(port, codec=codec, **kwargs)

    def resolve_port(self, port: int = 0) -> int:
        return port if is_valid_port(port) else self.port

    def send(
        self,
        message: T,
        port: int,
        host: str = DEFAULT_HOST,
        attempts: int = DEFAULT_ATTEMPTS,
        delay_ms: int = DEFAULT_DELAY_MS,
    ) -> None:
        """Send ``message`` to ``host:port`` in a single write.

        Each attempt resolves the host, opens a fresh connection and writes the
        whole payload. Failed attempts are logged and followed by a pause of
        ``delay_ms`` milliseconds. An empty payload is not sent at all.

        Raises ``SendFailed`` once ``attempts`` attempts have failed.
        """
        if attempts < 1:
            raise ValueError(f"attempts must be at least 1, got {attempts}")
        if not is_valid_port(port):
            raise ValueError(f"port must be in the range {MIN_PORT}-{MAX_PORT}, got {port}")

        data = self.codec.encode(message)
        if not data:
            return

        last_error: OSError | None = None
        for attempt in range(1, attempts + 1):
            try:
                self.connector.write(host, port, data)
            except OSError as exc:
                last_error = exc
                self.logger.warning(
                    "send to %s:%d: attempt %d of %d failed: %s", host, port, attempt, attempts, exc
                )
                if attempt < attempts:
                    time.sleep(delay_ms / 1000.0)
                continue

            self.logger.debug("sent %d bytes to %s:%d on attempt %d", len(data), host, port, attempt)
            if self.history is not None:
                self.history.append(self._decode(data))
            return

        self.logger.error("send to %s:%d: maximum attempts reached (%d)", host, port, attempts)
        raise SendFailed(host, port, attempts, last_error)

    def receive_result(self, port: int = 0) -> ReceiveResult:
        """Listen on ``port``, accept one connection and read from it once.

        ``port`` falls back to the channel's own port when it is 0 or out of
        range. Blocks until a peer connects. At most ``MAX_BUFFER`` bytes are
        read; anything beyond that is discarded with the connection.
        """
        listen_port = self.resolve_port(port)
        try:
            with TcpListener.listening(self.listen_host, listen_port) as listener:
                self.logger.debug("listening on %s:%d", self.listen_host, listen_port)
                with listener.accept_one() as conn:
                    raw = read_once(conn, MAX_BUFFER)
        except OSError as exc:
            self.logger.error("receive on port %d failed: %s", listen_port, exc)
            return ReceiveResult.transport_error(exc)

        if not raw:
            self.logger.info("receive on port %d: peer closed the connection without sending", listen_port)
            return ReceiveResult.closed_cleanly()

        self.logger.debug("received %d bytes on port %d", len(raw), listen_port)
        if self.history is not None:
            self.history.append(self._decode(raw))
        return ReceiveResult.success(raw)

    def _decode(self, raw: bytes) -> T:
        try:
            return self.codec.decode(raw)
        except ValueError as exc:
            self.logger.error("could not decode %d bytes: %s", len(raw), exc)
            return self.codec.decode(b"")

    def receive(self, port: int = 0) -> T:
        """Receive one payload. Failures are logged and yield an empty payload."""
        return self._decode(bytes(self.receive_result(port).payload))

    def receive_text(self, port: int = 0) -> str:
        return self.receive_result(port).payload.text
