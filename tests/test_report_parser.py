import uuid
from datetime import datetime, timezone

import pytest

from soarca.api import get_cache_status_text
from soarca.cache import ExecutionEntry, Status, StepResult
from soarca.report_parser import parse_cache_playbook_entry, parse_cache_step_entries
from soarca.variables import Variable, new_variables

EXECUTION_ID = uuid.UUID("6ba7b810-9dad-11d1-80b4-00c04fd430c0")
MOMENT = datetime(2014, 11, 12, 11, 45, 26, 371000, tzinfo=timezone.utc)


def _step(status=Status.SUCCESSFULLY_EXECUTED, error=None):
    return StepResult(
        execution_id=EXECUTION_ID,
        step_id="action--test",
        name="ssh-tests",
        description="test step",
        started=MOMENT,
        ended=MOMENT,
        commands_b64=["c3NoIGxzIC1sYQ=="],
        variables=new_variables(Variable(type="string", name="var1", value="testing")),
        status=status,
        error=error,
        is_automated=True,
    )


def _entry(status=Status.ONGOING, error=None, steps=None):
    return ExecutionEntry(
        execution_id=EXECUTION_ID,
        name="ssh-test-playbook",
        description="Playbook description",
        playbook_id="test",
        started=MOMENT,
        ended=None,
        step_results=steps if steps is not None else {"action--test": _step()},
        error=error,
        status=status,
    )


def test_playbook_report_fields():
    report = parse_cache_playbook_entry(_entry())
    assert report.type == "execution_status"
    assert report.execution_id == "6ba7b810-9dad-11d1-80b4-00c04fd430c0"
    assert report.playbook_id == "test"
    assert report.name == "ssh-test-playbook"
    assert report.description == "Playbook description"
    assert report.started == MOMENT
    assert report.ended is None
    assert report.status == "ongoing"
    assert report.status_text == get_cache_status_text("ongoing", "playbook")
    assert report.request_interval == 5
    assert list(report.step_results) == ["action--test"]


def test_playbook_error_is_appended():
    report = parse_cache_playbook_entry(_entry(status=Status.FAILED, error=RuntimeError("boom")))
    assert report.status == "failed"
    assert report.status_text.startswith(get_cache_status_text("failed", "playbook"))
    assert report.status_text.endswith(" - error: boom")


def test_step_report_fields():
    reports = parse_cache_step_entries({"action--test": _step()})
    step = reports["action--test"]
    assert step.execution_id == str(EXECUTION_ID)
    assert step.step_id == "action--test"
    assert step.name == "ssh-tests"
    assert step.executed_by == "soarca"
    assert step.status == "successfully_executed"
    assert step.status_text == get_cache_status_text("successfully_executed", "step")
    assert step.commands_b64 == ["c3NoIGxzIC1sYQ=="]
    assert step.variables["var1"].value == "testing"
    assert step.automated_execution is True
    assert step.started == MOMENT and step.ended == MOMENT


def test_step_error_is_appended():
    reports = parse_cache_step_entries(
        {"s": _step(status=Status.TIMEOUT_ERROR, error=TimeoutError("late"))}
    )
    assert reports["s"].status == "timeout_error"
    assert reports["s"].status_text.endswith(" - error: late")


def test_empty_step_entries():
    assert parse_cache_step_entries({}) == {}
    report = parse_cache_playbook_entry(_entry(steps={}))
    assert report.step_results == {}


def test_unknown_step_status_raises():
    bad = _step()
    bad.status = 99
    with pytest.raises(ValueError):
        parse_cache_playbook_entry(_entry(steps={"s": bad}))


def test_unknown_playbook_status_raises():
    entry = _entry()
    entry.status = 42
    with pytest.raises(ValueError):
        parse_cache_playbook_entry(entry)


def test_report_serialises():
    data = parse_cache_playbook_entry(_entry()).to_dict()
    assert data["execution_id"] == str(EXECUTION_ID)
    assert data["ended"] == "0001-01-01T00:00:00Z"
    assert data["step_results"]["action--test"]["executed_by"] == "soarca"