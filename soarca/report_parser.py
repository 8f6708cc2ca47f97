"""Turn cached execution records into API execution reports."""

from __future__ import annotations

from typing import Mapping

from .api import (
    REPORT_LEVEL_PLAYBOOK,
    REPORT_LEVEL_STEP,
    PlaybookExecutionReport,
    StepExecutionReport,
    cache_status_to_string,
    get_cache_status_text,
)
from .cache import ExecutionEntry, StepResult

DEFAULT_REQUEST_INTERVAL = 5
EXECUTION_STATUS_TYPE = "execution_status"
EXECUTED_BY = "soarca"


def _status_text(status: str, level: str, error: BaseException | None) -> str:
    text = get_cache_status_text(status, level)
    if error is not None:
        text = f"{text} - error: {error}"
    return text


def parse_cache_playbook_entry(entry: ExecutionEntry) -> PlaybookExecutionReport:
    """Build the report of a whole playbook execution from its cache entry.

    Raises ValueError when the entry or one of its steps has an unknown status.
    """
    status = cache_status_to_string(entry.status)
    status_text = _status_text(status, REPORT_LEVEL_PLAYBOOK, entry.error)
    step_results = parse_cache_step_entries(entry.step_results)
    return PlaybookExecutionReport(
        type=EXECUTION_STATUS_TYPE,
        name=entry.name,
        description=entry.description,
        execution_id=str(entry.execution_id),
        playbook_id=entry.playbook_id,
        started=entry.started,
        ended=entry.ended,
        status=status,
        status_text=status_text,
        step_results=step_results,
        request_interval=DEFAULT_REQUEST_INTERVAL,
    )


def parse_cache_step_entries(
    entries: Mapping[str, StepResult],
) -> dict[str, StepExecutionReport]:
    """Build step reports keyed like the cached step results.

    Raises ValueError when a step has an unknown status.
    """
    reports: dict[str, StepExecutionReport] = {}
    for step_id, result in entries.items():
        status = cache_status_to_string(result.status)
        reports[step_id] = StepExecutionReport(
            execution_id=str(result.execution_id),
            step_id=result.step_id,
            name=result.name,
            description=result.description,
            started=result.started,
            ended=result.ended,
            status=status,
            status_text=_status_text(status, REPORT_LEVEL_STEP, result.error),
            executed_by=EXECUTED_BY,
            commands_b64=list(result.commands_b64),
            variables=result.variables,
            automated_execution=result.is_automated,
        )
    return reports