"""Point-to-point TCP messaging channel.

A ``Channel`` pushes one payload to ``host:port`` with bounded retry, and
accepts a single inbound connection to read one payload back:
- each call opens and closes its own sockets, no state is kept between calls
- one write on the sending side, one read of at most ``MAX_BUFFER`` bytes on
  the receiving side, no framing
- payloads are raw bytes by default, any other type goes through a codec
"""

from .channel import Channel
from .constants import DEFAULT_HOST, DEFAULT_PORT, MAX_BUFFER
from .errors import ChannelError, SendFailed
from .message import BytesCodec, Codec, Message, TextCodec
from .result import ReceiveOutcome, ReceiveResult

__all__ = [
    "BytesCodec",
    "Channel",
    "ChannelError",
    "Codec",
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "MAX_BUFFER",
    "Message",
    "ReceiveOutcome",
    "ReceiveResult",
    "SendFailed",
    "TextCodec",
]
