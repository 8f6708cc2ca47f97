"""In-memory records of playbook executions and their step results."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum

from .variables import Variables

_NIL_UUID = uuid.UUID(int=0)


class Status(IntEnum):
    """Execution state of a playbook or a step."""

    SUCCESSFULLY_EXECUTED = 0
    FAILED = 1
    ONGOING = 2
    SERVER_SIDE_ERROR = 3
    CLIENT_SIDE_ERROR = 4
    TIMEOUT_ERROR = 5
    EXCEPTION_CONDITION_ERROR = 6
    AWAIT_USER_INPUT = 7

    def __str__(self) -> str:
        return self.name.lower()

    def __format__(self, spec: str) -> str:
        return format(str(self), spec)


@dataclass
class StepResult:
    """What is known about one step of an execution."""

    execution_id: uuid.UUID = _NIL_UUID
    step_id: str = ""
    name: str = ""
    description: str = ""
    started: datetime | None = None
    ended: datetime | None = None
    commands_b64: list[str] = field(default_factory=list)
    variables: Variables = field(default_factory=Variables)
    status: Status = Status.SUCCESSFULLY_EXECUTED
    error: BaseException | None = None
    is_automated: bool = False


@dataclass
class ExecutionEntry:
    """What is known about one playbook execution."""

    execution_id: uuid.UUID = _NIL_UUID
    name: str = ""
    description: str = ""
    playbook_id: str = ""
    started: datetime | None = None
    ended: datetime | None = None
    step_results: dict[str, StepResult] = field(default_factory=dict)
    error: BaseException | None = None
    status: Status = Status.SUCCESSFULLY_EXECUTED


@dataclass
class ExecutionMetadata:
    """Identifies a step within a playbook execution."""

    execution_id: uuid.UUID = _NIL_UUID
    playbook_id: str = ""
    step_id: str = ""