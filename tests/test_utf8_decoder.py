from __future__ import annotations

import pytest

from rwc.core.counting import Utf8CharCounter
from rwc.core.counting.decoder import MAX_PENDING_BYTES


def test_sequence_split_across_feeds() -> None:
    counter = Utf8CharCounter()
    encoded = "€".encode("utf-8")
    assert counter.feed(encoded[:1]) == 0
    assert counter.pending == encoded[:1]
    assert counter.feed(encoded[1:2]) == 0
    assert counter.pending == encoded[:2]
    assert counter.feed(encoded[2:]) == 1
    assert counter.pending == b""
    assert counter.finish() == 1


def test_pending_never_exceeds_three_bytes() -> None:
    counter = Utf8CharCounter()
    for byte in "😀".encode("utf-8")[:3]:
        counter.feed(bytes([byte]))
        assert len(counter.pending) <= MAX_PENDING_BYTES
    assert counter.finish() == 0


@pytest.mark.parametrize(
    "payload",
    [
        b"\xff",  # never a valid byte
        b"\x80",  # continuation without a lead
        b"\xc0\xaf",  # overlong '/'
        b"\xed\xa0\x80",  # UTF-16 surrogate
        b"\xf4\x90\x80\x80",  # beyond U+10FFFF
    ],
)
def test_invalid_sequences_count_nothing(payload: bytes) -> None:
    counter = Utf8CharCounter()
    counter.feed(payload)
    assert counter.finish() == 0


def test_interrupted_sequence_resumes_at_next_byte() -> None:
    counter = Utf8CharCounter()
    counter.feed(b"\xe2\x82")
    counter.feed(b"a")
    assert counter.finish() == 1


def test_reset_clears_state() -> None:
    counter = Utf8CharCounter()
    counter.feed(b"ab\xc3")
    counter.reset()
    assert counter.pending == b""
    assert counter.finish() == 0
