"""Objects exchanged over the HTTP API: errors, executions, reports and status."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .cacao import _format_time
from .cache import Status
from .variables import Variable

REPORT_LEVEL_PLAYBOOK = "playbook"
REPORT_LEVEL_STEP = "step"

SUCCESSFULLY_EXECUTED = "successfully_executed"
FAILED = "failed"
ONGOING = "ongoing"
SERVER_SIDE_ERROR = "server_side_error"
CLIENT_SIDE_ERROR = "client_side_error"
TIMEOUT_ERROR = "timeout_error"
EXCEPTION_CONDITION_ERROR = "exception_condition_error"
AWAIT_USER_INPUT = "await_user_input"

SUCCESSFULLY_EXECUTED_TEXT = "%s execution completed successfully"
FAILED_TEXT = "something went wrong in the execution of this %s"
ONGOING_TEXT = "this %s is currently being executed"
SERVER_SIDE_ERROR_TEXT = "there was a server-side problem with the execution of this %s"
CLIENT_SIDE_ERROR_TEXT = "something in the data provided for this %s raised an issue"
TIMEOUT_ERROR_TEXT = "the execution of this %s timed out"
EXCEPTION_CONDITION_ERROR_TEXT = "the execution of this %s raised a playbook exception"
AWAIT_USER_INPUT_TEXT = "waiting for users to provide input for the %s execution"

_STATUS_TEXTS = {
    SUCCESSFULLY_EXECUTED: SUCCESSFULLY_EXECUTED_TEXT,
    FAILED: FAILED_TEXT,
    ONGOING: ONGOING_TEXT,
    SERVER_SIDE_ERROR: SERVER_SIDE_ERROR_TEXT,
    CLIENT_SIDE_ERROR: CLIENT_SIDE_ERROR_TEXT,
    TIMEOUT_ERROR: TIMEOUT_ERROR_TEXT,
    EXCEPTION_CONDITION_ERROR: EXCEPTION_CONDITION_ERROR_TEXT,
    AWAIT_USER_INPUT: AWAIT_USER_INPUT_TEXT,
}


@dataclass
class PlaybookMeta:
    """Summary information on a stored playbook."""

    id: str = ""
    name: str = ""
    description: str = ""
    valid_from: datetime | None = None
    valid_until: datetime | None = None
    labels: list[str] = field(default_factory=list)


@dataclass
class ApiError:
    """Body of an error response."""

    status: int
    message: str
    original_call: str
    downstream_call: str = ""


@dataclass
class Execution:
    """Identifies a started playbook execution."""

    execution_id: uuid.UUID
    playbook_id: str


@dataclass
class StepExecutionReport:
    """Report on one step of a playbook execution."""

    name: str = ""
    description: str = ""
    execution_id: str = ""
    step_id: str = ""
    started: datetime | None = None
    ended: datetime | None = None
    status: str = ""
    status_text: str = ""
    executed_by: str = ""
    commands_b64: list[str] = field(default_factory=list)
    variables: dict[str, Variable] = field(default_factory=dict)
    automated_execution: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON object form."""
        return {
            "name": self.name,
            "description": self.description,
            "execution_id": self.execution_id,
            "step_id": self.step_id,
            "started": _format_time(self.started),
            "ended": _format_time(self.ended),
            "status": self.status,
            "status_text": self.status_text,
            "executed_by": self.executed_by,
            "commands_b64": list(self.commands_b64),
            "variables": {key: var.to_dict() for key, var in self.variables.items()},
            "automated_execution": self.automated_execution,
        }


@dataclass
class PlaybookExecutionReport:
    """Report on a whole playbook execution."""

    name: str = ""
    description: str = ""
    type: str = ""
    execution_id: str = ""
    playbook_id: str = ""
    started: datetime | None = None
    ended: datetime | None = None
    status: str = ""
    status_text: str = ""
    step_results: dict[str, StepExecutionReport] = field(default_factory=dict)
    request_interval: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON object form."""
        return {
            "name": self.name,
            "description": self.description,
            "type": self.type,
            "execution_id": self.execution_id,
            "playbook_id": self.playbook_id,
            "started": _format_time(self.started),
            "ended": _format_time(self.ended),
            "status": self.status,
            "status_text": self.status_text,
            "step_results": {k: v.to_dict() for k, v in self.step_results.items()},
            "request_interval": self.request_interval,
        }


@dataclass
class Uptime:
    """How long the service has been running."""

    since: datetime | None = None
    milliseconds: int = 0


@dataclass
class ServiceStatus:
    """Status of the running service."""

    version: str = ""
    runtime: str = ""
    mode: str = ""
    time: datetime | None = None
    uptime: Uptime = field(default_factory=Uptime)


def cache_status_to_string(status: Status | int) -> str:
    """Return the report string for a cached execution status."""
    return str(Status(status))


def get_cache_status_text(status: str, level: str) -> str:
    """Return the human-readable text for a status at the 'playbook' or 'step' level."""
    if level not in (REPORT_LEVEL_PLAYBOOK, REPORT_LEVEL_STEP):
        raise ValueError("invalid reporting level provided. use either 'playbook' or 'step'")
    template = _STATUS_TEXTS.get(status)
    if template is None:
        raise ValueError("unable to read execution information status")
    return template % level