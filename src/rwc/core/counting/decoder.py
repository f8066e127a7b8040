"""Incremental UTF-8 codepoint counting with bounded pending state."""
from __future__ import annotations

import codecs

MAX_PENDING_BYTES = 3


class Utf8CharCounter:
    """Counts valid UTF-8 codepoints across arbitrarily split byte chunks.

    Malformed input never raises: invalid lead bytes, overlong forms,
    surrogates, values past U+10FFFF and sequences cut short by a new lead
    byte are dropped without contributing to the count. Between feeds the
    decoder holds at most the first bytes of one incomplete sequence.
    """

    def __init__(self) -> None:
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="ignore")
        self.chars = 0

    @property
    def pending(self) -> bytes:
        """Bytes of an incomplete multi-byte sequence awaiting continuation."""

        buffered, _flag = self._decoder.getstate()
        return buffered

    def feed(self, chunk: bytes) -> int:
        decoded = self._decoder.decode(chunk)
        self.chars += len(decoded)
        return len(decoded)

    def finish(self) -> int:
        """Flush the decoder; an incomplete trailing sequence is discarded."""

        decoded = self._decoder.decode(b"", final=True)
        self.chars += len(decoded)
        return self.chars

    def reset(self) -> None:
        self._decoder.reset()
        self.chars = 0
