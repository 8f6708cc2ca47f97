"""Decoding of CACAO playbooks from JSON, with workflow safety checks."""

from __future__ import annotations

import json
import logging

from .cacao import CACAO_VERSION_1, CACAO_VERSION_2, Playbook
from .validator import WorkflowValidationError, is_safe_cacao_workflow

_log = logging.getLogger(__name__)


class DecodeError(ValueError):
    """Raised when data cannot be decoded into a safe CACAO playbook."""


def set_playbook_keys_as_id(playbook: Playbook) -> None:
    """Make the ids and variable names in a playbook match their map keys."""
    for key, step in playbook.workflow.items():
        step.id = key
    for key, target in playbook.target_definitions.items():
        target.id = key
    for key, agent in playbook.agent_definitions.items():
        agent.id = key
    for key, auth in playbook.authentication_info_definitions.items():
        auth.id = key
    for key, variable in playbook.playbook_variables.items():
        variable.name = key
    for step in playbook.workflow.values():
        for key, variable in step.step_variables.items():
            variable.name = key


def decode(data: bytes | str) -> Playbook:
    """Decode JSON into a playbook whose workflow is safe to execute.

    Raises DecodeError when the JSON is malformed, the spec version is not
    supported, the structure does not fit the model, or the workflow is unsafe.
    """
    try:
        raw = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        _log.error("%s", exc)
        raise DecodeError(f"invalid JSON: {exc}") from exc
    if not isinstance(raw, dict):
        raise DecodeError("playbook must be a JSON object")

    version = raw.get("spec_version")
    if version == CACAO_VERSION_1:
        raise DecodeError(
            "you submitted a cacao v1 playbook. at the moment, "
            "soarca only supports cacao v2 playbooks"
        )
    if version != CACAO_VERSION_2:
        raise DecodeError("unsupported cacao version")

    try:
        playbook = Playbook.from_dict(raw)
    except (TypeError, ValueError) as exc:
        _log.error("playbook decoding failed: %s", exc)
        raise DecodeError(f"playbook decoding failed: {exc}") from exc

    set_playbook_keys_as_id(playbook)

    try:
        is_safe_cacao_workflow(playbook)
    except WorkflowValidationError as exc:
        _log.error("%s", exc)
        raise DecodeError(str(exc)) from exc

    return playbook