from __future__ import annotations

from netchannel.message import BytesCodec, Message, TextCodec
from netchannel.result import ReceiveOutcome, ReceiveResult

def test_message_is_mutable_bytes():
    m = Message(b"pin")
    m.append(ord("g"))
    assert m == b"ping"
    assert len(m) == 4

def test_text_view_is_byte_for_byte():
    m = Message(bytes([0x68, 0x69, 0xE9, 0xFF]))
    assert m.text == "hi\xe9\xff"
    assert len(m.text) == len(m)
    assert str(m) == m.text

def test_repr_shows_bytes():
    assert repr(Message(b"ab")) == "Message(b'ab')"

def test_bytes_codec():
    c = BytesCodec()
    assert c.encode(bytearray(b"x")) == b"x"
    decoded = c.decode(b"xyz")
    assert isinstance(decoded, Message)
    assert decoded == b"xyz"

def test_text_codec_encodings():
    assert TextCodec().encode("\xe9") == b"\xe9"
    assert TextCodec().decode(b"\xe9") == "\xe9"
    assert TextCodec("utf-8").encode("\xe9") == b"\xc3\xa9"

def test_receive_result_tags():
    ok = ReceiveResult.success(b"data")
    assert ok.outcome is ReceiveOutcome.SUCCESS
    assert ok.payload == b"data"
    assert ok.error is None

    closed = ReceiveResult.closed_cleanly()
    assert closed.outcome is ReceiveOutcome.CLOSED_CLEANLY
    assert closed.payload == b""

    err = ConnectionResetError("reset")
    failed = ReceiveResult.transport_error(err)
    assert failed.outcome is ReceiveOutcome.TRANSPORT_ERROR
    assert failed.error is err
    assert failed.payload == b""
