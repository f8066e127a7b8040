"""Single forward pass over a byte stream with bounded memory usage."""
from __future__ import annotations

import io
import logging
from typing import BinaryIO

from rwc.common.errors import StreamReadError
from rwc.common.models import Counts
from .decoder import Utf8CharCounter

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 1_048_576
ASCII_WHITESPACE = b" \t\n\r\x0b\x0c"

# Collapses every byte to one of two markers so word starts can be found with
# a single substring count per chunk.
_SPACE = 0x20
_WORD = 0x78
_WORD_TABLE = bytes(_SPACE if value in ASCII_WHITESPACE else _WORD for value in range(256))
_WORD_START = bytes((_SPACE, _WORD))


class CountAccumulator:
    """Running totals for one source; lives only for a single count call."""

    def __init__(self) -> None:
        self.bytes = 0
        self.words = 0
        self.lines = 0
        self.in_word = False
        self.decoder = Utf8CharCounter()

    def feed(self, chunk: bytes) -> None:
        if not chunk:
            return
        self.bytes += len(chunk)
        self.lines += chunk.count(b"\n")

        # A word is counted at its first byte, so a word continuing from the
        # previous chunk is not counted again.
        marked = chunk.translate(_WORD_TABLE)
        self.words += marked.count(_WORD_START)
        if marked[0] == _WORD and not self.in_word:
            self.words += 1
        self.in_word = marked[-1] == _WORD

        self.decoder.feed(chunk)

    def finish(self) -> Counts:
        return Counts(
            bytes=self.bytes,
            chars=self.decoder.finish(),
            words=self.words,
            lines=self.lines,
        )


class StreamCounter:
    """Counts bytes, UTF-8 codepoints, words and lines without buffering the input."""

    def __init__(self, *, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        self.chunk_size = max(1, chunk_size)

    def count(self, reader: BinaryIO, *, identifier: str = "<stream>") -> Counts:
        """Consume ``reader`` to exhaustion and return its counts.

        A failing read raises :class:`StreamReadError`; counts gathered so far
        are discarded with the accumulator.
        """

        accumulator = CountAccumulator()
        while True:
            try:
                chunk = reader.read(self.chunk_size)
            except OSError as exc:
                raise StreamReadError(identifier, exc) from exc
            if not chunk:
                break
            accumulator.feed(chunk)
        counts = accumulator.finish()
        logger.debug("counted %s: %s", identifier, counts)
        return counts


def count_stream(reader: BinaryIO, *, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Counts:
    return StreamCounter(chunk_size=chunk_size).count(reader)


def count_bytes(data: bytes, *, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Counts:
    """Count an in-memory byte string as if it were a stream."""

    return count_stream(io.BytesIO(data), chunk_size=chunk_size)
