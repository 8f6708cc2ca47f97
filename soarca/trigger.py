"""Injection of caller-supplied variables into a playbook before it is triggered."""

from __future__ import annotations

import json
import logging

from .cacao import Playbook
from .variables import Variable, Variables

_log = logging.getLogger(__name__)


class VariableMergeError(ValueError):
    """Raised when supplied variables cannot be merged into a playbook."""


def merge_variables_in_playbook(playbook: Playbook, body: bytes | str) -> None:
    """Set the values of the playbook's external variables from a JSON body.

    The body is a JSON object of variables keyed by name. Every one must exist
    in the playbook, have the same type and be marked external; only its value
    is taken over. Raises VariableMergeError otherwise.
    """
    try:
        payload = Variables.from_dict(json.loads(body))
    except (ValueError, TypeError) as exc:
        _log.debug("%s", exc)
        raise VariableMergeError("cannot unmarshal provided variables") from exc

    for name, variable in payload.items():
        existing = playbook.playbook_variables.get(name)
        if existing is None:
            raise VariableMergeError(
                "provided variables is not a valid subset of the variables for the "
                f"referenced playbook [ playbook id: {playbook.id} ]"
            )
        if variable.type != existing.type:
            raise VariableMergeError(
                f"mismatch in variables type for [ {name} ]: payload var type = "
                f"{variable.type}, playbook var type = {existing.type}"
            )
        if not existing.external:
            raise VariableMergeError(
                f"playbook variable [ {name} ] cannot be assigned in playbook because "
                "it is not marked as external in the plabook"
            )
        playbook.playbook_variables[name] = Variable(
            name=name,
            type=existing.type,
            description=existing.description,
            value=variable.value,
            constant=existing.constant,
            external=existing.external,
        )