"""Single-pass byte, codepoint, word and line counting."""

from .decoder import Utf8CharCounter
from .stream import StreamCounter, count_bytes, count_stream

__all__ = ["StreamCounter", "Utf8CharCounter", "count_bytes", "count_stream"]
