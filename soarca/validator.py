"""Safety checks on CACAO workflows: references resolve and every branch ends."""

from __future__ import annotations

import logging
from email.utils import parseaddr
from typing import Mapping

from .cacao import STEP_TYPE_END, AgentTarget, Playbook, Step

_log = logging.getLogger(__name__)


class WorkflowValidationError(ValueError):
    """Raised when a playbook workflow is not safe to execute."""


def is_safe_cacao_workflow(playbook: Playbook) -> None:
    """Check that a playbook's workflow is safe to execute.

    Every referenced step, agent, target and authentication entry must exist,
    contact e-mail addresses must parse, and no branch may loop.
    Raises WorkflowValidationError otherwise.
    """
    if not playbook.workflow_exception:
        _log.warning("workflow exception not implemented")

    start = playbook.workflow_start
    if start not in playbook.workflow:
        raise WorkflowValidationError(f"start step {start} not found in workflow")

    for step_id in playbook.workflow:
        try:
            _check_step(playbook, step_id)
        except WorkflowValidationError as exc:
            _log.error("%s", exc)
            raise

    _all_branches_end(playbook.workflow, start, frozenset())


def _check_step(playbook: Playbook, step_id: str) -> None:
    step = playbook.workflow[step_id]
    _check_sub_steps_exist(playbook.workflow, step)
    _check_agent_targets(playbook, step)
    _check_auth_info(playbook, step)


def _check_agent_targets(playbook: Playbook, step: Step) -> None:
    if step.agent:
        agent = playbook.agent_definitions.get(step.agent)
        if agent is None:
            raise WorkflowValidationError(
                f"agent {step.agent}not found in agent_definitions"
            )
        bad = _invalid_email(agent)
        if bad is not None:
            raise WorkflowValidationError(
                f"agent {step.agent}has invalid email address: {bad}"
            )
    for target_id in step.targets:
        target = playbook.target_definitions.get(target_id)
        if target is None:
            raise WorkflowValidationError(
                f"target {target_id}not found in target_definitions"
            )
        bad = _invalid_email(target)
        if bad is not None:
            raise WorkflowValidationError(
                f"target {target_id}has invalid email address: {bad}"
            )


def _is_valid_email(text: str) -> bool:
    _, address = parseaddr(text)
    if not address or address.count("@") != 1:
        return False
    local, domain = address.split("@")
    if not local or not domain:
        return False
    return not any(ch.isspace() for ch in address)


def _invalid_email(agent_target: AgentTarget) -> str | None:
    """Return the first contact e-mail that does not parse, or None."""
    for email in agent_target.contact.email.values():
        if not _is_valid_email(email):
            return email
    return None


def _check_auth_info(playbook: Playbook, step: Step) -> None:
    info = step.authentication_info
    if info and info not in playbook.authentication_info_definitions:
        raise WorkflowValidationError(
            f"authenticaiton_info {info}not found in authentication_info_definitions"
        )


def _check_sub_steps_exist(workflow: Mapping[str, Step], step: Step) -> None:
    referenced = [
        step.on_completion,
        step.on_success,
        step.on_failure,
        step.on_true,
        step.on_false,
        *step.next_steps,
        *step.cases.values(),
    ]
    for step_id in referenced:
        if step_id and step_id not in workflow:
            raise WorkflowValidationError(f"step {step_id} does not exist")


def _children(step: Step) -> list[str]:
    candidates = [
        step.on_completion,
        step.on_success,
        step.on_failure,
        step.on_true,
        step.on_false,
    ]
    children = [c for c in candidates if c]
    children.extend(step.next_steps)
    children.extend(step.cases.values())
    return list(dict.fromkeys(children))


def _format_sequence(sequence: set[str]) -> str:
    return "map[" + " ".join(f"{key}:{{}}" for key in sorted(sequence)) + "]"


def _all_branches_end(
    workflow: Mapping[str, Step], step_id: str, branch: frozenset[str]
) -> None:
    """Walk every branch depth first and fail on loops or dangling non-end leaves."""
    current = branch | {step_id}
    step = workflow.get(step_id, Step())
    children = _children(step)

    if not children:
        if step.type == STEP_TYPE_END:
            return
        raise WorkflowValidationError("step with no branches is not an end step")

    for child in children:
        if child in current:
            sequence = set(current) | {"infinite#" + child}
            raise WorkflowValidationError(
                "worflow seems to loop on branch sequence " + _format_sequence(sequence)
            )
        _all_branches_end(workflow, child, current)