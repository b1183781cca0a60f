from __future__ import annotations


class ChannelError(Exception):
    pass


class SendFailed(ChannelError):
    """Raised when every send attempt to ``host:port`` has failed."""

    def __init__(self, host: str, port: int, attempts: int, last_error: BaseException | None = None):
        self.host = host
        self.port = port
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"could not send to {host}:{port} after {attempts} attempts: {last_error}")
