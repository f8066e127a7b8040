"""Counting core: stream counter, source resolution, and aggregation."""

from .aggregator import Aggregator
from .counting import StreamCounter, Utf8CharCounter, count_bytes, count_stream
from .sources import read_path_list, resolve_sources, split_path_list

__all__ = [
    "Aggregator",
    "StreamCounter",
    "Utf8CharCounter",
    "count_bytes",
    "count_stream",
    "read_path_list",
    "resolve_sources",
    "split_path_list",
]
