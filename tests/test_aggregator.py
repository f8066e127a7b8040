from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from rwc.common import models
from rwc.common.errors import BackendError, ErrorCode
from rwc.common.models import Counts, FileProgress, RuntimeConfig, ProfileSettings, Source
from rwc.core import Aggregator, StreamCounter


class BrokenHandle(io.RawIOBase):
    def __init__(self) -> None:
        super().__init__()
        self.served = False

    def readable(self) -> bool:
        return True

    def read(self, size: int = -1) -> bytes:
        if not self.served:
            self.served = True
            return b"partial data\n"
        raise OSError(5, "Input/output error")


def _write(tmp_path: Path, name: str, payload: bytes) -> Source:
    path = tmp_path / name
    path.write_bytes(payload)
    return Source.file(path)


def test_totals_sum_every_field(tmp_path: Path) -> None:
    sources = [_write(tmp_path, "a.txt", b"a\n"), _write(tmp_path, "b.txt", b"b b\n")]
    result = Aggregator().run(sources, compute_totals=True)
    assert [entry.counts for entry in result.entries] == [
        Counts(bytes=2, chars=2, words=1, lines=1),
        Counts(bytes=4, chars=4, words=2, lines=1),
    ]
    assert result.totals == Counts(bytes=6, chars=6, words=3, lines=2)


def test_totals_absent_when_not_requested(tmp_path: Path) -> None:
    result = Aggregator().run([_write(tmp_path, "a.txt", b"a\n")], compute_totals=False)
    assert result.totals is None


def test_missing_source_does_not_stop_the_run(tmp_path: Path) -> None:
    sources = [
        _write(tmp_path, "first.txt", b"one\n"),
        Source.file(tmp_path / "missing.txt"),
        _write(tmp_path, "last.txt", b"two words\n"),
    ]
    result = Aggregator().run(sources, compute_totals=True)

    assert [entry.identifier for entry in result.entries] == [str(s.path) for s in sources]
    failed = result.entries[1]
    assert not failed.ok
    assert failed.error.code == ErrorCode.SOURCE_UNAVAILABLE
    assert str(tmp_path / "missing.txt") in failed.error.message
    assert result.has_failures
    assert result.totals == Counts(bytes=14, chars=14, words=3, lines=2)


def test_directory_is_reported_as_failure(tmp_path: Path) -> None:
    result = Aggregator().run([Source.file(tmp_path)])
    assert not result.entries[0].ok
    assert result.entries[0].error.code == ErrorCode.SOURCE_UNAVAILABLE


def test_no_totals_when_every_source_failed(tmp_path: Path) -> None:
    result = Aggregator().run([Source.file(tmp_path / "nope")], compute_totals=True)
    assert result.totals is None
    assert len(result.failures) == 1


def test_mid_stream_failure_discards_partial_counts_and_closes_handle(tmp_path: Path, monkeypatch) -> None:
    handles: list[BrokenHandle] = []

    def fake_open(name, mode="r"):
        handle = BrokenHandle()
        handles.append(handle)
        return handle

    monkeypatch.setattr(models, "open", fake_open, raising=False)
    ok = Source.stdin(io.BytesIO(b"fine\n"))
    result = Aggregator(StreamCounter(chunk_size=4)).run([Source.file("flaky.bin"), ok], compute_totals=True)

    broken = result.entries[0]
    assert broken.counts is None
    assert broken.error.code == ErrorCode.IO_ERROR
    assert handles and handles[0].closed
    assert result.totals == Counts(bytes=5, chars=5, words=1, lines=1)


def test_progress_callback_and_log(tmp_path: Path) -> None:
    log_path = tmp_path / "logs" / "progress.jsonl"
    events: list[FileProgress] = []
    sources = [_write(tmp_path, "a.txt", b"abc"), Source.file(tmp_path / "gone.txt")]
    Aggregator(progress_log=log_path).run(sources, progress_callback=events.append)

    assert [event.current_phase for event in events] == ["count-complete", "count-failed"]
    assert events[0].processed_bytes == 3
    records = [json.loads(line) for line in log_path.read_text(encoding="utf-8").splitlines()]
    assert len(records) == 2
    assert records[1]["error"].endswith("No such file or directory")
    assert "timestamp" in records[0]


def test_unwritable_progress_log_rejected_before_counting(tmp_path: Path) -> None:
    with pytest.raises(BackendError) as exc:
        Aggregator(progress_log=tmp_path)
    assert exc.value.code == ErrorCode.IO_ERROR
    assert str(tmp_path) in exc.value.message


def test_from_config_uses_profile_chunk_size() -> None:
    config = RuntimeConfig(profile=ProfileSettings(description="tiny", chunk_size=16))
    assert Aggregator.from_config(config).counter.chunk_size == 16
