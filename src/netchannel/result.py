from __future__ import annotations

import enum
from dataclasses import dataclass, field

from .message import Message


class ReceiveOutcome(enum.Enum):
    SUCCESS = "success"
    CLOSED_CLEANLY = "closed_cleanly"
    TRANSPORT_ERROR = "transport_error"


@dataclass(frozen=True, slots=True)
class ReceiveResult:
    outcome: ReceiveOutcome
    payload: Message = field(default_factory=Message)
    error: OSError | None = None

    @staticmethod
    def success(payload: bytes) -> "ReceiveResult":
        return ReceiveResult(ReceiveOutcome.SUCCESS, Message(payload))

    @staticmethod
    def closed_cleanly() -> "ReceiveResult":
        return ReceiveResult(ReceiveOutcome.CLOSED_CLEANLY)

    @staticmethod
    def transport_error(error: OSError) -> "ReceiveResult":
        return ReceiveResult(ReceiveOutcome.TRANSPORT_ERROR, error=error)
