"""Structured progress logging utilities."""
from __future__ import annotations

import json
import time
from dataclasses import asdict
from pathlib import Path
from typing import Optional

from .errors import BackendError, ErrorCode
from .models import FileProgress


class ProgressLogger:
    """Writes one JSONL record per counted source for later inspection."""

    def __init__(self, path: Optional[Path]) -> None:
        self.path = path
        if path:
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                # Fail before any source is counted if the log cannot be appended to.
                with path.open("a", encoding="utf-8"):
                    pass
            except OSError as exc:
                raise BackendError(
                    ErrorCode.IO_ERROR,
                    f"Progress log '{path}' is not writable: {exc.strerror or exc}",
                    context={"path": str(path)},
                ) from exc

    def emit(self, progress: FileProgress) -> None:
        if not self.path:
            return
        payload = asdict(progress)
        payload["timestamp"] = time.time()
        try:
            with self.path.open("a", encoding="utf-8") as handle:
                handle.write(json.dumps(payload))
                handle.write("\n")
        except OSError as exc:
            raise BackendError(
                ErrorCode.IO_ERROR,
                f"Progress log '{self.path}' could not be written: {exc.strerror or exc}",
                context={"path": str(self.path)},
            ) from exc
