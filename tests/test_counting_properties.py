"""Property checks for the stream counter."""
from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from rwc.core.counting import count_bytes

ascii_bytes = st.lists(st.integers(min_value=0, max_value=127)).map(bytes)
chunk_sizes = st.integers(min_value=1, max_value=64)


@given(data=st.binary())
def test_bytes_and_lines_match_raw_input(data: bytes) -> None:
    counts = count_bytes(data)
    assert counts.bytes == len(data)
    assert counts.lines == data.count(b"\n")


@given(data=st.binary())
def test_words_match_ascii_whitespace_split(data: bytes) -> None:
    assert count_bytes(data).words == len(data.split())


@given(data=st.binary())
def test_chars_bounded_by_bytes(data: bytes) -> None:
    counts = count_bytes(data)
    assert counts.chars <= counts.bytes
    assert counts.chars == len(data.decode("utf-8", errors="ignore"))


@given(data=ascii_bytes)
def test_ascii_chars_equal_bytes(data: bytes) -> None:
    counts = count_bytes(data)
    assert counts.chars == counts.bytes


@given(data=st.binary(), chunk_size=chunk_sizes)
def test_chunking_does_not_change_counts(data: bytes, chunk_size: int) -> None:
    assert count_bytes(data, chunk_size=chunk_size) == count_bytes(data)


@given(left=st.binary(), right=st.binary())
def test_split_after_newline_sums_to_whole(left: bytes, right: bytes) -> None:
    head = left + b"\n"
    assert count_bytes(head) + count_bytes(right) == count_bytes(head + right)


def test_split_inside_word_or_codepoint_does_not_sum() -> None:
    # Known boundary: a single source must be counted as one stream.
    whole = count_bytes("ab é".encode("utf-8"))
    encoded = "ab é".encode("utf-8")
    split = count_bytes(encoded[:1]) + count_bytes(encoded[1:])
    assert split.words == whole.words + 1
    split_char = count_bytes(encoded[:4]) + count_bytes(encoded[4:])
    assert split_char.chars == whole.chars - 1
