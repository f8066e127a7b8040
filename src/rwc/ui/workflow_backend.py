"""Backend workflow for the GUI and other embedding callers."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

from rwc.common.config import DEFAULT_PROFILE, load_runtime_config
from rwc.common.models import AggregateResult, CountOptions, FileProgress
from rwc.core import Aggregator, resolve_sources
from .render import Labels, ReportRow, build_rows


@dataclass(slots=True)
class WorkflowReport:
    result: AggregateResult
    columns: List[str]
    rows: List[ReportRow]
    events: List[FileProgress] = field(default_factory=list)

    @property
    def failed(self) -> List[str]:
        return [entry.identifier for entry in self.result.failures]


def parse_path_text(text: str) -> List[str]:
    """Split the GUI's multi-line path box into paths, ignoring blank lines."""

    return [line.strip() for line in text.splitlines() if line.strip()]


def run_count_workflow(
    paths: Sequence[str],
    *,
    options: CountOptions | None = None,
    profile: str = DEFAULT_PROFILE,
) -> WorkflowReport:
    """Count ``paths`` in order and return rows ready for display."""

    options = options or CountOptions(show_totals=True)
    runtime = load_runtime_config(profile=profile)
    events: List[FileProgress] = []
    # An empty selection would otherwise fall back to reading stdin.
    sources = resolve_sources(list(paths)) if paths else ()
    result = Aggregator.from_config(runtime).run(
        sources,
        compute_totals=options.show_totals,
        progress_callback=events.append,
    )
    labels = Labels(stdin=runtime.global_settings.stdin_label, totals=runtime.global_settings.totals_label)
    return WorkflowReport(
        result=result,
        columns=options.columns(),
        rows=build_rows(result, options, labels),
        events=events,
    )


def summarize(report: WorkflowReport) -> Iterable[str]:
    counted = len(report.result.successes)
    yield f"Counted {counted} of {len(report.result.entries)} file(s)."
    for identifier in report.failed:
        yield f"Failed: {identifier}"
