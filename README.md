# soarca

A pure-Python library for CACAO v2 security playbooks. It models playbooks and their
variables, decodes them from JSON, checks that a workflow is safe to run, turns cached
execution records into report objects and describes the messages of the fin protocol.
It has no runtime dependencies.

## Modules

- `soarca.variables`: `Variable` and `Variables`, a `dict` of variables keyed by name.
  `insert` keeps an existing entry, `insert_or_replace` overwrites it, `insert_range` and
  `merge` do the same for a whole mapping, and `find` returns a variable or `None`.
  `select` returns a new collection that holds only the given names. `interpolate` replaces
  every `<name>:value` reference in a string with that variable's value. `new_variables(*vars)`
  builds a collection, and where two variables share a name the first one is kept.
- `soarca.cacao`: the playbook model. It has `Playbook`, `Step`, `Command`, `AgentTarget`,
  `AuthenticationInformation`, `ExtensionDefinition`, `DataMarking`, `ExternalReference`,
  `CivicLocation`, `Contact` and `NetAddressType`. Each model has `from_dict` / `to_dict`.
  Empty optional fields are left out of `to_dict`, and a missing timestamp is `None`. The
  helpers `new_agent_targets`, `new_authentication_info_definitions`,
  `new_extension_definitions` and `new_data_markings` key their arguments by `id`.
  `new_playbook()` returns an empty `Playbook`.
- `soarca.decoder`: `decode(data)` parses JSON and accepts only `spec_version` `"cacao-2.0"`.
  It builds a `Playbook`, applies `set_playbook_keys_as_id` and runs the workflow safety
  check. It raises `DecodeError` on any failure. `set_playbook_keys_as_id(playbook)` copies
  each map key into the matching step, agent, target or authentication `id`, and into each
  variable `name`.
- `soarca.validator`: `is_safe_cacao_workflow(playbook)` raises `WorkflowValidationError`
  (a `ValueError`) in these cases:
  - the start step is missing;
  - a referenced step, agent, target or authentication entry does not exist;
  - a contact e-mail address does not parse;
  - a branch loops;
  - a branch ends on a step that is not an `end` step.
- `soarca.cache`: execution records. It has `Status`, whose `str()` gives for example
  `"successfully_executed"`, plus `ExecutionEntry`, `StepResult` and `ExecutionMetadata`.
- `soarca.api`: the report and status objects. These are `PlaybookExecutionReport` and
  `StepExecutionReport`, both with `to_dict`, plus `PlaybookMeta`, `ApiError`, `Execution`,
  `Uptime` and `ServiceStatus`. `cache_status_to_string(status)` converts a status.
  `get_cache_status_text(status, level)` takes `level` as `"playbook"` or `"step"` and raises
  `ValueError` for an unknown status or level.
- `soarca.report_parser`: `parse_cache_playbook_entry(entry)` and
  `parse_cache_step_entries(entries)` turn cache records into reports. If a record carries an
  error, its text is appended to the status text.
- `soarca.fin`: fin protocol message dataclasses. These are `Ack`, `Nack`, `Register`,
  `Unregister`, `Command`, `Result`, `Control`, `FinStatus`, `Message` and their parts.
  - Constructors: `new_command()` (type `"command"`, timeout 1), `new_ack(message_id)` and
    `new_nack(message_id)`.
  - `encode(message)` returns compact JSON bytes.
  - `decode(data, message_type)` returns an instance of `message_type`. It raises
    `ValueError` on a type mismatch.
- `soarca.trigger`: `merge_variables_in_playbook(playbook, body)` takes values from a JSON
  object of variables and sets them into the playbook's variables. Each supplied variable must
  already exist in the playbook, have the same type and be marked `external`. Only its value
  is taken over. Otherwise `VariableMergeError` is raised.

## Install

```
pip install .
```

## Example

```python
from soarca.decoder import decode
from soarca.trigger import merge_variables_in_playbook

with open("playbook.json", "rb") as handle:
    playbook = decode(handle.read())   # DecodeError if invalid or unsafe

# "__target__" must be an external string variable of the playbook
merge_variables_in_playbook(
    playbook,
    b'{"__target__": {"type": "string", "value": "10.0.0.1"}}',
)
print(playbook.playbook_variables.interpolate("ping __target__:value"))
```

## What this package does not do

This is a library of models and checks. It does not:

- run playbooks or execute commands;
- serve an HTTP API;
- store playbooks or executions;
- connect to a fin message broker.

`decode` checks the spec version and the workflow's safety, but it does not validate
playbooks against the CACAO JSON schema.

## Tests

```
pip install .[test]
pytest
```