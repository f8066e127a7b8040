"""Resolution of input sources from file operands, stdin, or a path-list file."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import BinaryIO, List, Optional, Sequence, Tuple, Union

from rwc.common.errors import ListFormatError, SourceUnavailable, UsageError
from rwc.common.models import Source

STDIN_SENTINEL = "-"
NUL_SEPARATOR = b"\0"
NEWLINE_SEPARATOR = b"\n"

PathLike = Union[str, Path]


def split_path_list(data: bytes, separator: bytes, *, list_name: str = STDIN_SENTINEL) -> List[str]:
    """Split raw list bytes into UTF-8 paths.

    The empty entry produced by a trailing separator is dropped; any other
    empty entry, undecodable entry, or a list without entries is rejected.
    """

    entries = data.split(separator)
    if entries and entries[-1] == b"":
        entries.pop()

    paths: List[str] = []
    for position, raw in enumerate(entries, start=1):
        if not raw:
            raise ListFormatError(list_name, f"entry {position} is an empty file name")
        if NUL_SEPARATOR in raw:
            raise ListFormatError(list_name, f"entry {position} contains a NUL byte")
        try:
            paths.append(raw.decode("utf-8"))
        except UnicodeDecodeError as exc:
            raise ListFormatError(list_name, f"entry {position} is not valid UTF-8: {exc.reason}") from exc

    if not paths:
        raise ListFormatError(list_name, "no file names found")
    return paths


def read_path_list(files0_from: PathLike, stdin: Optional[BinaryIO] = None) -> List[str]:
    """Read the paths named by ``--files0-from``.

    ``-`` reads newline separated paths from standard input; anything else
    is a file of NUL separated paths.
    """

    list_name = str(files0_from)
    if list_name == STDIN_SENTINEL:
        reader = stdin if stdin is not None else sys.stdin.buffer
        try:
            data = reader.read()
        except OSError as exc:
            raise SourceUnavailable(list_name, exc) from exc
        return split_path_list(data, NEWLINE_SEPARATOR, list_name=list_name)

    try:
        with open(list_name, "rb") as handle:
            data = handle.read()
    except OSError as exc:
        raise SourceUnavailable(list_name, exc) from exc
    return split_path_list(data, NUL_SEPARATOR, list_name=list_name)


def resolve_sources(
    files: Sequence[PathLike],
    files0_from: Optional[PathLike] = None,
    stdin: Optional[BinaryIO] = None,
) -> Tuple[Source, ...]:
    """Turn CLI inputs into the ordered sources to count."""

    if files0_from is not None:
        if files:
            raise UsageError("file operands cannot be combined with --files0-from")
        return tuple(Source.listed(path) for path in read_path_list(files0_from, stdin))
    if files:
        return tuple(Source.file(path) for path in files)
    return (Source.stdin(stdin),)
