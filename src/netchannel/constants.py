from __future__ import annotations

DEFAULT_HOST = "localhost"
DEFAULT_LISTEN_HOST = "0.0.0.0"
DEFAULT_PORT = 10000

MIN_PORT = 1
MAX_PORT = 65535

MAX_BUFFER = 65536  # upper bound of a single read

DEFAULT_ATTEMPTS = 10
DEFAULT_DELAY_MS = 1000

LISTEN_BACKLOG = 1
