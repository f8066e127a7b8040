"""Data models shared across UI, counting core, and configuration layers."""
from __future__ import annotations

import sys
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import BinaryIO, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from .errors import BackendError, SourceUnavailable

STDIN_IDENTIFIER = "Stdin"
COUNT_FIELDS: Tuple[str, ...] = ("bytes", "chars", "words", "lines")


@dataclass(frozen=True, slots=True)
class Counts:
    """Four independent counters produced for one source."""

    bytes: int = 0
    chars: int = 0
    words: int = 0
    lines: int = 0

    @classmethod
    def zero(cls) -> "Counts":
        return cls()

    @classmethod
    def total(cls, items: Iterable["Counts"]) -> "Counts":
        """Sum every field across ``items``."""

        return sum(items, cls.zero())

    def __add__(self, other: object) -> "Counts":
        if not isinstance(other, Counts):
            return NotImplemented
        return Counts(
            bytes=self.bytes + other.bytes,
            chars=self.chars + other.chars,
            words=self.words + other.words,
            lines=self.lines + other.lines,
        )

    def get(self, name: str) -> int:
        if name not in COUNT_FIELDS:
            raise KeyError(name)
        return getattr(self, name)

    def as_dict(self) -> Dict[str, int]:
        return {name: getattr(self, name) for name in COUNT_FIELDS}


class SourceKind(str, Enum):
    FILE = "file"
    STDIN = "stdin"
    LISTED = "listed"


@dataclass(frozen=True, slots=True)
class Source:
    """Single-use byte-producing input: a named file, stdin, or a listed path."""

    kind: SourceKind
    name: str = STDIN_IDENTIFIER
    stream: Optional[BinaryIO] = field(default=None, compare=False, repr=False)

    @classmethod
    def file(cls, path: Union[str, Path]) -> "Source":
        return cls(SourceKind.FILE, str(path))

    @classmethod
    def listed(cls, path: Union[str, Path]) -> "Source":
        return cls(SourceKind.LISTED, str(path))

    @classmethod
    def stdin(cls, stream: Optional[BinaryIO] = None) -> "Source":
        return cls(SourceKind.STDIN, STDIN_IDENTIFIER, stream)

    @property
    def identifier(self) -> str:
        return self.name

    @property
    def path(self) -> Optional[Path]:
        if self.kind is SourceKind.STDIN:
            return None
        return Path(self.name)

    @contextmanager
    def open(self) -> Iterator[BinaryIO]:
        """Yield a sequential binary reader, closing it afterwards.

        Standard input is yielded as-is and left open for the process.
        """

        if self.kind is SourceKind.STDIN:
            yield self.stream if self.stream is not None else sys.stdin.buffer
            return
        try:
            handle = open(self.name, "rb")
        except OSError as exc:
            raise SourceUnavailable(self.identifier, exc) from exc
        with handle:
            yield handle


@dataclass(frozen=True, slots=True)
class SourceResult:
    """Outcome of counting one source: either counts or the error that stopped it."""

    identifier: str
    counts: Optional[Counts] = None
    error: Optional[BackendError] = None
    kind: SourceKind = SourceKind.FILE

    @property
    def ok(self) -> bool:
        return self.error is None and self.counts is not None


@dataclass(frozen=True, slots=True)
class AggregateResult:
    """Per-source outcomes in encounter order plus the optional totals row."""

    entries: Tuple[SourceResult, ...] = ()
    totals: Optional[Counts] = None

    @property
    def successes(self) -> List[SourceResult]:
        return [entry for entry in self.entries if entry.ok]

    @property
    def failures(self) -> List[SourceResult]:
        return [entry for entry in self.entries if not entry.ok]

    @property
    def has_failures(self) -> bool:
        return any(not entry.ok for entry in self.entries)


class OutputFormat(str, Enum):
    TABLE = "table"
    CSV = "csv"

    @classmethod
    def parse(cls, value: str) -> "OutputFormat":
        try:
            return cls(value.strip().lower())
        except ValueError as exc:
            allowed = ", ".join(item.value for item in cls)
            raise ValueError(f"unknown format '{value}' (allowed: {allowed})") from exc


@dataclass(frozen=True, slots=True)
class CountOptions:
    """Which count columns to show and whether to append a totals row."""

    bytes: bool = True
    chars: bool = False
    words: bool = True
    lines: bool = True
    show_totals: bool = False

    @classmethod
    def from_flags(
        cls,
        *,
        bytes: bool = False,
        chars: bool = False,
        words: bool = False,
        lines: bool = False,
        show_totals: bool = False,
    ) -> "CountOptions":
        # No column flag at all means the bytes/words/lines default.
        if not (bytes or chars or words or lines):
            return cls(show_totals=show_totals)
        return cls(bytes=bytes, chars=chars, words=words, lines=lines, show_totals=show_totals)

    def columns(self) -> List[str]:
        return [name for name in COUNT_FIELDS if getattr(self, name)]


@dataclass(slots=True)
class FileProgress:
    """Progress event emitted once a source has been counted or has failed."""

    identifier: str
    processed_bytes: int = 0
    current_phase: str = "pending"
    error: Optional[str] = None


@dataclass(slots=True)
class GlobalSettings:
    default_format: str = OutputFormat.TABLE.value
    log_level: str = "WARNING"
    stdin_label: str = STDIN_IDENTIFIER
    totals_label: str = "Totals"


@dataclass(slots=True)
class ProfileSettings:
    description: str = ""
    chunk_size: int = 1_048_576


@dataclass(slots=True)
class RuntimeConfig:
    global_settings: GlobalSettings = field(default_factory=GlobalSettings)
    profile: ProfileSettings = field(default_factory=ProfileSettings)
