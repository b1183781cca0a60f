from __future__ import annotations

import socket
from dataclasses import dataclass

from .constants import LISTEN_BACKLOG, MAX_BUFFER


@dataclass(frozen=True, slots=True)
class TcpConnector:
    """Opens client connections. Every call resolves the host again."""

    def open(self, host: str, port: int) -> socket.socket:
        return socket.create_connection((host, port))

    def write(self, host: str, port: int, data: bytes) -> None:
        with self.open(host, port) as sock:
            sock.sendall(data)


class TcpListener:
    def __init__(self, sock: socket.socket):
        self.sock = sock

    @classmethod
    def listening(cls, host: str, port: int, backlog: int = LISTEN_BACKLOG) -> "TcpListener":
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind((host, port))
            sock.listen(backlog)
        except OSError:
            sock.close()
            raise
        return cls(sock)

    def accept_one(self) -> socket.socket:
        conn, _ = self.sock.accept()
        return conn

    def close(self) -> None:
        self.sock.close()

    def __enter__(self) -> "TcpListener":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


def read_once(conn: socket.socket, bufsize: int = MAX_BUFFER) -> bytes:
    return conn.recv(bufsize)
